from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_api.database import Base

# Every mutable column is nullable: updates replace the full field set and an
# omitted field is stored as NULL rather than keeping the previous value.
# Datetimes are naive local date-times (no timezone).

# Generated keys are BIGINT; SQLite only auto-assigns rowids to a column
# declared exactly INTEGER PRIMARY KEY, which is 64-bit there anyway.
BigIntegerKey = BigInteger().with_variant(Integer, "sqlite")


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(BigIntegerKey, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_added: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)


# ---------------------------------------------------------------------------
# HelpRequest
# ---------------------------------------------------------------------------
class HelpRequest(Base):
    __tablename__ = "helprequests"

    id: Mapped[int] = mapped_column(BigIntegerKey, primary_key=True, autoincrement=True)
    requester_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    team_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    table_or_breakout_room: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    request_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    solved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


# ---------------------------------------------------------------------------
# MenuItemReview
# ---------------------------------------------------------------------------
class MenuItemReview(Base):
    __tablename__ = "menuitemreview"

    id: Mapped[int] = mapped_column(BigIntegerKey, primary_key=True, autoincrement=True)
    item_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    reviewer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    stars: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    date_reviewed: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


# ---------------------------------------------------------------------------
# RecommendationRequest
# ---------------------------------------------------------------------------
class RecommendationRequest(Base):
    __tablename__ = "recommendationrequests"

    id: Mapped[int] = mapped_column(BigIntegerKey, primary_key=True, autoincrement=True)
    requester_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    professor_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date_requested: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    date_needed: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    done: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


# ---------------------------------------------------------------------------
# UCSBDiningCommonsMenuItem
# ---------------------------------------------------------------------------
class DiningCommonsMenuItem(Base):
    __tablename__ = "ucsbdiningcommonsmenuitem"

    id: Mapped[int] = mapped_column(BigIntegerKey, primary_key=True, autoincrement=True)
    dining_commons_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    station: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


# ---------------------------------------------------------------------------
# UCSBOrganization: natural key supplied by the caller
# ---------------------------------------------------------------------------
class Organization(Base):
    __tablename__ = "ucsborganization"

    org_code: Mapped[str] = mapped_column(String(50), primary_key=True)
    org_translation_short: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    org_translation: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    inactive: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
