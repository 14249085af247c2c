"""Reusable constrained field types shared by full and partial schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field


Text = Annotated[str, Field(strict=True)]
NonEmptyText = Annotated[str, Field(strict=True, min_length=1)]
Name = Annotated[str, Field(strict=True, min_length=3)]
TextList = Annotated[list[Text], Field(min_length=1)]
Popularity = Annotated[float, Field(strict=True, ge=0, le=5)]
Score = Annotated[float, Field(strict=True)]
