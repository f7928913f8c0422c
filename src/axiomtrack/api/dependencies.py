"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from axiomtrack.config.settings import Settings, get_settings
from axiomtrack.core.dependencies import ServiceContainer, get_container

SettingsDep = Annotated[Settings, Depends(get_settings)]
ContainerDep = Annotated[ServiceContainer, Depends(get_container)]
