"""
Notes service: create, look up, update and delete personal notes.

Every route requires a bearer token, and every route passes the caller's
username and the requested owner through the ownership gate before the
store is touched.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, status
from fastapi.responses import PlainTextResponse

from . import notes
from .config import Settings, load_settings
from .deps import get_current_username, get_db
from .notes import NoteExists
from .ownership import guard
from .schemas import NoteCreate, NoteOut, NoteUpdate
from .service import create_service_app

router = APIRouter(tags=["Notes"])


# PUBLIC_INTERFACE
@router.post("/new", response_class=PlainTextResponse, status_code=201, summary="Create a new note")
def create_note(note: NoteCreate, db=Depends(get_db), caller: str = Depends(get_current_username)):
    """
    Create a note owned by `note.user`, which must be the authenticated user.
    Missing date and description are filled in before the note is stored.
    """
    try:
        created = guard(caller, note.user, lambda: notes.create_note(db, note))
    except NoteExists as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return f"Successfully created '{created.title}'"


# Registered before /find/{user}/{title}: the literal "many" segment wins.
# PUBLIC_INTERFACE
@router.get("/find/many/{user}/{title}", response_model=List[NoteOut], summary="Find notes by title prefix")
def read_many(user: str, title: str, db=Depends(get_db), caller: str = Depends(get_current_username)):
    """
    All notes of `user` whose title starts with `title` (case-sensitive).
    """
    return guard(caller, user, lambda: notes.find_notes_by_prefix(db, user, title))


# PUBLIC_INTERFACE
@router.get("/find/{user}/{title}", response_model=NoteOut, summary="Find a note by title")
def read(user: str, title: str, db=Depends(get_db), caller: str = Depends(get_current_username)):
    note = guard(caller, user, lambda: notes.find_note(db, user, title))
    if note is None:
        raise HTTPException(status_code=404, detail="No matching documents")
    return note


# PUBLIC_INTERFACE
@router.get("/find/{user}", response_model=List[NoteOut], summary="List all notes of a user")
def read_all(user: str, db=Depends(get_db), caller: str = Depends(get_current_username)):
    return guard(caller, user, lambda: notes.find_all_notes(db, user))


# PUBLIC_INTERFACE
@router.put("/update/{user}/{title}", response_class=PlainTextResponse, summary="Update a note")
def update(
    user: str,
    title: str,
    note_update: NoteUpdate,
    db=Depends(get_db),
    caller: str = Depends(get_current_username),
):
    """
    Update description and date of a note. The note keeps its title.

    This replaces rather than patches: a body without `description` resets it
    to "N/A", and a body without `date` stamps the current time.
    """
    matched = guard(caller, user, lambda: notes.update_note(db, user, title, note_update))
    if not matched:
        raise HTTPException(status_code=404, detail="No matching documents")
    return f"Successfully updated '{title}'"


# PUBLIC_INTERFACE
@router.delete("/delete/{user}/{title}", response_class=PlainTextResponse, summary="Delete a note")
def delete(user: str, title: str, db=Depends(get_db), caller: str = Depends(get_current_username)):
    """
    Delete a note. Deleting a note that does not exist still succeeds.
    """
    guard(caller, user, lambda: notes.delete_note(db, user, title))
    return f"Successfully deleted '{title}'"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the notes service."""
    app = create_service_app(
        title="Personal Notes API",
        description="Identity-gated create, find, update and delete of personal notes.",
        settings=settings,
        allow_methods=("GET", "POST", "PUT", "DELETE"),
        openapi_tags=[{"name": "Notes", "description": "Create, update, view, delete, search notes"}],
    )
    app.include_router(router)
    return app


app = create_app()


def run_server(settings: Optional[Settings] = None):
    """Run the notes service."""
    import uvicorn

    settings = settings or load_settings()
    uvicorn.run(create_app(settings), host=settings.notes_host, port=settings.notes_port)


if __name__ == "__main__":
    run_server()
