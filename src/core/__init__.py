"""Core: dominio, contratos, configuración y servicios (sin detalles de UI)."""
