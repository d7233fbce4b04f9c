#!/usr/bin/env python3
"""
Field Hashing Example

This example demonstrates:
- Declaring hashable fields on plain classes, dataclasses and pydantic models
- Hashing with the default and an explicit algorithm
- Showing that unselected fields do not affect the hash
- Inspecting the canonical bytes that are digested
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import BaseModel

from field_digest import HashableField, ObjectHasher, hashable, hashable_field


@hashable({"name": 1, "age": 2})
class Person:
    def __init__(self, name, age, last_seen=None):
        self.name = name
        self.age = age
        self.last_seen = last_seen


@dataclass
class Team:
    members: list = hashable_field(order=2)
    title: str = hashable_field(order=1)
    cached_size: int = 0


class Release(BaseModel):
    version: str = HashableField(order=1)
    published: datetime = HashableField(order=2)
    download_count: int = 0


def main():
    hasher = ObjectHasher()

    alice = Person("Alice", 34, last_seen=datetime.now(timezone.utc))
    print("Canonical bytes:", hasher.encode(alice).decode("utf-8"))
    print("SHA-256:", hasher.hash(alice))
    print("SHA-512:", hasher.hash(alice, "SHA-512"))

    # last_seen is not selected, so a later timestamp hashes identically
    later = Person("Alice", 34, last_seen=datetime(2030, 1, 1, tzinfo=timezone.utc))
    print("Unselected field ignored:", hasher.hash(alice) == hasher.hash(later))

    team = Team(members=[alice, Person("Bob", 29)], title="Platform")
    reordered = Team(members=[Person("Bob", 29), alice], title="Platform")
    print("Team:", hasher.hash(team))
    print("Member order matters:", hasher.hash(team) != hasher.hash(reordered))

    release = Release(
        version="1.2.0",
        published=datetime(2024, 5, 1, tzinfo=timezone.utc),
        download_count=1200,
    )
    print("Release canonical bytes:", hasher.encode(release).decode("utf-8"))
    print("Supported algorithms:", ", ".join(sorted(hasher.supported_algorithms())))


if __name__ == "__main__":
    main()
