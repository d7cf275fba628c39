"""Shared fixtures: call-counting source hosts and sample protocol data."""

from __future__ import annotations

import asyncio

import pytest

from core.domain.errors import FetchError, ResolutionError
from core.domain.models import ProtocolDescription

HANDLER = "API/hermes/inspector/chrome/CDPHandler.cpp"
MESSAGE_TYPES = "API/hermes/inspector/chrome/MessageTypes.h"
SHA = "0123456789abcdef0123456789abcdef01234567"


class StubSourceHost:
    """In-memory `SourceHost` that counts calls and can fail on demand."""

    def __init__(self, files: dict[str, str], *, sha: str = SHA) -> None:
        self.files = dict(files)
        self.sha = sha
        self.revision_calls = 0
        self.file_calls: list[str] = []
        self.fail_revision: int | None = None
        self.fail_paths: dict[str, int] = {}

    async def resolve_branch_revision(self, owner: str, repo: str, branch: str) -> str:
        self.revision_calls += 1
        await asyncio.sleep(0)
        if self.fail_revision is not None:
            raise ResolutionError(owner=owner, repo=repo, branch=branch, status_code=self.fail_revision)
        return self.sha

    async def fetch_file_at_revision(self, owner: str, repo: str, commit_sha: str, path: str) -> str:
        self.file_calls.append(path)
        await asyncio.sleep(0)
        if path in self.fail_paths:
            raise FetchError.for_file(path, self.fail_paths[path], "Not Found")
        return self.files[path]


@pytest.fixture
def stub_host() -> StubSourceHost:
    return StubSourceHost(
        {
            HANDLER: (
                'void CDPHandlerImpl::handle(const m::debugger::PauseRequest &req) {\n'
                '  // "Debugger.pause"\n'
                '  m::debugger::PausedNotification note;\n'
                '}\n'
            ),
            MESSAGE_TYPES: "namespace debugger {\nstruct Location;\n}\nusing debugger::Location;\n",
        }
    )


@pytest.fixture
def protocol() -> ProtocolDescription:
    return ProtocolDescription.model_validate(
        {
            "domains": [
                {
                    "domain": "Debugger",
                    "commands": [{"name": "pause"}, {"name": "resume"}],
                    "events": [{"name": "paused"}],
                    "types": [{"id": "Location"}, {"id": "Scope"}],
                }
            ]
        }
    )
