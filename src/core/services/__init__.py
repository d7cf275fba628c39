"""Servicios del Core: caché de código remoto y matcher de referencias."""
