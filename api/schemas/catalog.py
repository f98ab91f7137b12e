"""
Catalog API Schemas - Labels, genres, people, artists and records

The catalog is maintained by admins; albums put records up for sale.
"""

from datetime import date
from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from music_commerce.constants import DURATION_PATTERN, LANGUAGES, Gender, MusicGenre
from api.schemas.common import CreateModel, ObjectId, StoredOut, UpdateModel, Year

MIN_BIRTH_DATE = date(1900, 1, 1)


def _check_birth_date(v: date) -> date:
    if not MIN_BIRTH_DATE <= v <= date.today():
        raise ValueError(f"Date of birth must be between {MIN_BIRTH_DATE.isoformat()} and today")
    return v


def _check_language(v: str) -> str:
    v = v.lower()
    if v not in LANGUAGES:
        raise ValueError("Language must be an ISO 639-1 code")
    return v


BirthDate = Annotated[date, AfterValidator(_check_birth_date)]
Language = Annotated[str, AfterValidator(_check_language)]
Duration = Annotated[str, Field(pattern=DURATION_PATTERN, description="Total running time as mm:ss")]


# ---- Labels ----

class LabelCreate(CreateModel):
    name: str = Field(..., min_length=1)
    country: Optional[str] = None


class LabelUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = None


class LabelOut(StoredOut):
    name: str
    country: Optional[str] = None


# ---- Genres ----

class GenreCreate(CreateModel):
    name: MusicGenre


class GenreUpdate(UpdateModel):
    name: Optional[MusicGenre] = None


class GenreOut(StoredOut):
    name: str


# ---- People ----

class PersonCreate(CreateModel):
    name: str = Field(..., min_length=1)
    date_of_birth: Optional[BirthDate] = Field(None, description="YYYY-MM-DD, not before 1900")
    alive: bool
    nationality: str = Field(..., min_length=1)
    gender: Gender


class PersonUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1)
    date_of_birth: Optional[BirthDate] = None
    alive: Optional[bool] = None
    nationality: Optional[str] = Field(None, min_length=1)
    gender: Optional[Gender] = None


class PersonOut(StoredOut):
    name: str
    date_of_birth: Optional[date] = None
    alive: bool
    nationality: str
    gender: str


# ---- Artists ----

class ArtistCreate(CreateModel):
    name: str = Field(..., min_length=1)
    country: Optional[str] = None
    label_id: ObjectId


class ArtistUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = None
    label_id: Optional[ObjectId] = None


class ArtistOut(StoredOut):
    name: str
    country: Optional[str] = None
    label_id: str


# ---- Band members ----

class BandMemberCreate(CreateModel):
    artist_id: ObjectId
    person_id: ObjectId


class BandMemberUpdate(UpdateModel):
    artist_id: Optional[ObjectId] = None
    person_id: Optional[ObjectId] = None


class BandMemberOut(StoredOut):
    artist_id: str
    person_id: str


# ---- Records ----

class RecordCreate(CreateModel):
    artist_id: ObjectId
    label_id: Optional[ObjectId] = None
    name: str = Field(..., min_length=1)
    release_year: Year
    country: Optional[str] = None
    duration: Duration
    language: Language = Field(..., description="ISO 639-1 code")
    number_of_tracks: int = Field(..., ge=0)


class RecordUpdate(UpdateModel):
    artist_id: Optional[ObjectId] = None
    label_id: Optional[ObjectId] = None
    name: Optional[str] = Field(None, min_length=1)
    release_year: Optional[Year] = None
    country: Optional[str] = None
    duration: Optional[Duration] = None
    language: Optional[Language] = None
    number_of_tracks: Optional[int] = Field(None, ge=0)


class RecordOut(StoredOut):
    artist_id: str
    label_id: Optional[str] = None
    name: str
    release_year: int
    country: Optional[str] = None
    duration: str
    language: str
    number_of_tracks: int


# ---- Record genres ----

class RecordGenreCreate(CreateModel):
    genre_id: ObjectId
    record_id: ObjectId


class RecordGenreUpdate(UpdateModel):
    genre_id: Optional[ObjectId] = None
    record_id: Optional[ObjectId] = None


class RecordGenreOut(StoredOut):
    genre_id: str
    record_id: str
