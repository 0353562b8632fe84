"""FastAPI dependency injection for tile layout services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from tilesetup.application.commands import GenerateLayoutCommand
from tilesetup.application.factory import ServiceFactory, get_factory


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_generate_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> GenerateLayoutCommand:
    """Dependency for GenerateLayoutCommand."""
    return factory.create_generate_command()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
GenerateCommandDep = Annotated[GenerateLayoutCommand, Depends(get_generate_command)]
