"""Core: dominio, contratos y servicios del cruce protocolo <-> implementación."""
