"""
Catalog Routers - Labels, genres, people, artists, band members, records and
record genres, maintained by admins
"""

from music_commerce import resources
from api.routers.crud import build_crud_router
from api.schemas import catalog as schemas

routers = [
    build_crud_router(resources.LABELS, schemas.LabelCreate, schemas.LabelUpdate, schemas.LabelOut),
    build_crud_router(resources.GENRES, schemas.GenreCreate, schemas.GenreUpdate, schemas.GenreOut),
    build_crud_router(resources.PEOPLE, schemas.PersonCreate, schemas.PersonUpdate, schemas.PersonOut),
    build_crud_router(resources.ARTISTS, schemas.ArtistCreate, schemas.ArtistUpdate, schemas.ArtistOut),
    build_crud_router(
        resources.BAND_MEMBERS, schemas.BandMemberCreate, schemas.BandMemberUpdate, schemas.BandMemberOut
    ),
    build_crud_router(resources.RECORDS, schemas.RecordCreate, schemas.RecordUpdate, schemas.RecordOut),
    build_crud_router(
        resources.RECORD_GENRES, schemas.RecordGenreCreate, schemas.RecordGenreUpdate, schemas.RecordGenreOut
    ),
]
