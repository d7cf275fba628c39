"""Adaptadores de I/O: GitHub (HTTP), carga del protocolo y exportación."""
