from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Remedy:
    id: int
    title: str
    description: str = ""
    main_image_url: str | None = None
    ingredients: str | None = None
    instructions: str | None = None
    benefits: str | None = None
    precautions: str | None = None
    product_link: str | None = None
    status: str = "active"


@dataclass(frozen=True, slots=True)
class Video:
    id: int
    title: str
    description: str = ""
    image: str | None = None
    video_link: str | None = None
    ingredients: str | None = None
    instructions: str | None = None
    benefits: str | None = None
    status: str = "active"


@dataclass(frozen=True, slots=True)
class Article:
    id: int
    title: str
    description: str = ""
    image: str | None = None
    content: str = ""
    status: str = "active"
