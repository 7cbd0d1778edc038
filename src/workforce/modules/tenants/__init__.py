"""Tenants module - registry of tenant databases."""

from workforce.modules.tenants.models import Tenant


__all__ = [
    "Tenant",
]
