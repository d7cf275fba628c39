"""Tests for the JSON export of references."""

from __future__ import annotations

import json
from pathlib import Path

from adapters.json_exporter import build_payload, export_references_json
from core.domain.models import Match, ReferenceMap, RevisionMetadata


def _data() -> tuple[ReferenceMap, RevisionMetadata]:
    references = ReferenceMap()
    references.add("commands", "Debugger.pause", Match(path="h.cpp", text='"Debugger.pause"', offset=7, length=16))
    return references, RevisionMetadata(owner="facebook", repo="hermes", commit_sha="abc")


def test_payload_shape() -> None:
    references, revision = _data()
    payload = build_payload(references=references, revision=revision)
    assert payload["revision"] == {
        "owner": "facebook",
        "repo": "hermes",
        "commit_sha": "abc",
        "commit_url": "https://github.com/facebook/hermes/commit/abc",
    }
    assert payload["references"]["commands"]["Debugger.pause"] == [
        {"path": "h.cpp", "text": '"Debugger.pause"', "offset": 7, "length": 16}
    ]
    assert payload["references"]["types"] == {}


def test_export_writes_utf8_file(tmp_path: Path) -> None:
    references, revision = _data()
    out = export_references_json(references=references, revision=revision, output_path=tmp_path / "out" / "refs.json")
    assert out.exists()
    assert json.loads(out.read_text(encoding="utf-8"))["revision"]["commit_sha"] == "abc"
