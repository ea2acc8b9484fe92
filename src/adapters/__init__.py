"""Adaptadores concretos: transporte httpx, codec JSON y cliente REST."""
