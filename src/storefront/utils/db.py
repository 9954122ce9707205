"""Schema management for relational providers."""

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    # Touching _dao makes Protean build and register the SQLAlchemy model
    registries = (
        domain.registry.aggregates,
        domain.registry.entities,
        domain.registry.projections,
    )
    for registry in registries:
        for _, record in registry.items():
            if record.cls.meta_.provider == provider.name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create tables for every relational provider. Returns provider names."""
    created = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            try:
                _register_models(domain, provider)
                provider._metadata.create_all(engine)
            finally:
                engine.dispose()
            created.append(provider.name)
    return created


def drop_db(domain: Domain) -> list[str]:
    """Drop tables for every relational provider. Returns provider names."""
    dropped = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            try:
                _register_models(domain, provider)
                provider._metadata.drop_all(engine)
            finally:
                engine.dispose()
            dropped.append(provider.name)
    return dropped
