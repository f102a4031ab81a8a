"""Pydantic settings as container parameters.

Every settings field becomes a parameter; nested models are also available
leaf by leaf under dotted names.
"""

from __future__ import annotations

import asyncio

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from diref import Container, FunctionServiceFactoryDefinition, Parameter, Reference
from diref.integrations.pydantic_settings import register_settings_parameters


class DatabaseSettings(BaseModel):
    host: str = "localhost"
    port: int = 5432


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIREF_EXAMPLE_")

    database: DatabaseSettings = DatabaseSettings()


async def main() -> None:
    container = Container()
    register_settings_parameters(container, AppSettings(), prefix="app.")

    container.set("dsn", lambda host, port: f"postgresql://{host}:{port}")
    container.set_definition(
        "database_url",
        FunctionServiceFactoryDefinition(
            Reference("dsn"),
            [Parameter("app.database.host"), Parameter("app.database.port")],
        ),
    )

    [url] = await container.get("database_url")

    print(f"url={url}")  # => url=postgresql://localhost:5432


if __name__ == "__main__":
    asyncio.run(main())
