"""Quickstart: declare services as data and resolve them asynchronously.

Every dependency is spelled out: ``Reference`` points at another service,
``Parameter`` at a configuration value. ``get`` builds what is needed once and
returns the results in request order.
"""

from __future__ import annotations

import asyncio

from diref import ClassConstructorDefinition, Container, Parameter, Reference, mapping_locator


class Database:
    def __init__(self, host: str) -> None:
        self.host = host


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


async def main() -> None:
    classes = {"Database": Database, "UserRepository": UserRepository}
    container = Container(class_locator=mapping_locator(classes))

    container.set_parameter("db.host", "localhost")
    container.set_definition("db", ClassConstructorDefinition("Database", [Parameter("db.host")]))
    container.set_definition(
        "users",
        ClassConstructorDefinition("UserRepository", [Reference("db")]),
    )

    users, db = await container.get("users", "db")

    print(f"db_host={users.database.host}")  # => db_host=localhost
    print(f"shared_db={users.database is db}")  # => shared_db=True


if __name__ == "__main__":
    asyncio.run(main())
