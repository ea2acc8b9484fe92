"""Servicios del Core: parser de campos y orquestación CRUD."""
