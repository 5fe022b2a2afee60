"""Resource and DTO classes used as payloads and provider results."""

from __future__ import annotations


class UserResource:
    def __init__(self, name: str = "", email: str = "") -> None:
        self.name = name
        self.email = email
        self.company: object | None = None
        self.id: object | None = None


class ArticleResource:
    def __init__(self, title: str = "") -> None:
        self.title = title
        self.published = False
