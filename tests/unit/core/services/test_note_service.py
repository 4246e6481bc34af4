"""Unit tests for core/services/note_service.py"""

import logging
import uuid

import pytest
from sqlalchemy import delete, select

from noteguard.core.exceptions import AccessDeniedError, DecryptionError, NotFoundError, ValidationError
from noteguard.core.models.note import Note
from noteguard.core.repositories.note_repository import NoteRepository
from noteguard.core.schemas.notes import NoteCreate, NoteUpdate
from noteguard.core.services.admin_service import AdminService
from noteguard.core.services.note_service import NoteService
from noteguard.security.cipher import CipherService


async def _stored_note(session, note_id) -> Note:
    result = await session.execute(
        select(Note).where(Note.id == note_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def test_create_encrypts_at_rest(note_service, owner_actor, test_session, cipher):
    created = await note_service.create_note(owner_actor, NoteCreate(title="Groceries", content="milk, eggs"))

    assert created.title == "Groceries"
    assert created.content == "milk, eggs"
    assert created.owner_id == owner_actor.id
    assert created.expiration_time is None
    assert created.share_token is None

    stored = await _stored_note(test_session, created.id)
    assert stored.title != "Groceries"
    assert stored.content != "milk, eggs"
    assert cipher.decrypt(stored.title) == "Groceries"
    assert cipher.decrypt(stored.content) == "milk, eggs"


async def test_create_with_expiration(note_service, owner_actor, clock):
    created = await note_service.create_note(
        owner_actor, NoteCreate(title="t", content="c", expiration_hours=1)
    )
    assert created.created_at == clock()
    assert created.updated_at == clock()
    assert (created.expiration_time - created.created_at).total_seconds() == 3600


async def test_create_rejects_expiration_above_limit(note_service, owner_actor):
    limit = note_service.settings.max_note_expiration_hours
    with pytest.raises(ValidationError):
        await note_service.create_note(
            owner_actor, NoteCreate(title="t", content="c", expiration_hours=limit + 1)
        )


async def test_owner_and_admin_can_read(note_service, owner_actor, admin_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="A", content="secret"))

    assert (await note_service.get_note(owner_actor, created.id)).content == "secret"
    assert (await note_service.get_note(admin_actor, created.id)).content == "secret"


async def test_stranger_read_is_not_found(note_service, owner_actor, other_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="A", content="secret"))

    with pytest.raises(NotFoundError) as denied:
        await note_service.get_note(other_actor, created.id)
    with pytest.raises(NotFoundError) as missing:
        await note_service.get_note(other_actor, uuid.uuid4())
    assert denied.value.message == missing.value.message


async def test_expired_note_is_gone_for_everyone(note_service, owner_actor, admin_actor, clock):
    created = await note_service.create_note(
        owner_actor, NoteCreate(title="t", content="c", expiration_hours=1)
    )
    clock.advance(minutes=59)
    await note_service.get_note(owner_actor, created.id)

    clock.advance(minutes=1)
    for actor in (owner_actor, admin_actor):
        with pytest.raises(NotFoundError):
            await note_service.get_note(actor, created.id)
    assert (await note_service.list_user_notes(owner_actor)).notes == []


async def test_list_only_own_notes_newest_first(note_service, owner_actor, other_actor, clock):
    await note_service.create_note(owner_actor, NoteCreate(title="first", content="1"))
    clock.advance(minutes=1)
    await note_service.create_note(owner_actor, NoteCreate(title="second", content="2"))
    await note_service.create_note(other_actor, NoteCreate(title="not mine", content="x"))

    listing = await note_service.list_user_notes(owner_actor)
    assert [note.title for note in listing.notes] == ["second", "first"]
    assert listing.total == 2
    assert listing.skipped == 0


async def test_list_skips_undecryptable_notes(note_service, owner_actor, test_session, clock, caplog):
    await note_service.create_note(owner_actor, NoteCreate(title="good", content="fine"))
    clock.advance(minutes=1)
    broken = Note(
        owner_id=owner_actor.id,
        title=CipherService("some-other-key").encrypt("bad"),
        content="not even base64!",
        created_at=clock(),
        updated_at=clock(),
    )
    test_session.add(broken)
    await test_session.commit()

    logger = logging.getLogger("noteguard")
    logger.addHandler(caplog.handler)
    try:
        listing = await note_service.list_user_notes(owner_actor)
    finally:
        logger.removeHandler(caplog.handler)

    assert [note.title for note in listing.notes] == ["good"]
    assert listing.skipped == 1
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(getattr(r, "note_id", None) == str(broken.id) for r in warnings)
    assert all("bad" not in r.getMessage() for r in caplog.records)

    with pytest.raises(DecryptionError):
        await note_service.get_note(owner_actor, broken.id)


async def test_update_reencrypts_and_keeps_other_fields(note_service, owner_actor, test_session, clock):
    created = await note_service.create_note(
        owner_actor, NoteCreate(title="old", content="old body", expiration_hours=48)
    )
    share = await note_service.share_note(owner_actor, created.id, 24)
    clock.advance(minutes=5)

    updated = await note_service.update_note(owner_actor, created.id, NoteUpdate(title="new", content="new body"))

    assert updated.title == "new"
    assert updated.content == "new body"
    assert updated.created_at == created.created_at
    assert updated.updated_at == clock()
    assert updated.expiration_time == created.expiration_time
    assert updated.share_token == share.share_token

    fetched = await note_service.get_note(owner_actor, created.id)
    assert fetched.content == "new body"


class VanishingStore(NoteRepository):
    """Loses each note to another session right after reading it."""

    def __init__(self, session, session_factory):
        super().__init__(session)
        self.session_factory = session_factory

    async def get_by_id(self, note_id):
        note = await super().get_by_id(note_id)
        async with self.session_factory() as other:
            await other.execute(delete(Note).where(Note.id == note_id))
            await other.commit()
        return note


async def test_update_of_concurrently_deleted_note_is_not_found(
    note_service, owner_actor, test_session, session_factory, cipher, clock
):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))
    racing = NoteService(test_session, cipher, clock=clock, store=VanishingStore(test_session, session_factory))

    with pytest.raises(NotFoundError):
        await racing.update_note(owner_actor, created.id, NoteUpdate(title="new", content="new"))

    assert await _stored_note(test_session, created.id) is None


async def test_admin_may_update_and_delete(note_service, owner_actor, admin_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))

    await note_service.update_note(admin_actor, created.id, NoteUpdate(title="t2", content="c2"))
    await note_service.delete_note(admin_actor, created.id)

    with pytest.raises(NotFoundError):
        await note_service.get_note(owner_actor, created.id)


async def test_stranger_update_and_delete_are_denied(note_service, owner_actor, other_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))

    with pytest.raises(AccessDeniedError):
        await note_service.update_note(other_actor, created.id, NoteUpdate(title="x", content="y"))
    with pytest.raises(AccessDeniedError):
        await note_service.delete_note(other_actor, created.id)

    assert (await note_service.get_note(owner_actor, created.id)).title == "t"


async def test_missing_note_is_not_found_for_writes(note_service, other_actor):
    missing = uuid.uuid4()
    with pytest.raises(NotFoundError):
        await note_service.update_note(other_actor, missing, NoteUpdate(title="x", content="y"))
    with pytest.raises(NotFoundError):
        await note_service.delete_note(other_actor, missing)
    with pytest.raises(NotFoundError):
        await note_service.share_note(other_actor, missing, 1)


async def test_delete_expired_unpurged_note_is_not_found(note_service, owner_actor, clock):
    created = await note_service.create_note(
        owner_actor, NoteCreate(title="t", content="c", expiration_hours=1)
    )
    clock.advance(hours=2)
    with pytest.raises(NotFoundError):
        await note_service.delete_note(owner_actor, created.id)


async def test_share_and_resolve(note_service, owner_actor, clock):
    created = await note_service.create_note(owner_actor, NoteCreate(title="A", content="shared body"))
    share = await note_service.share_note(owner_actor, created.id)

    assert share.share_url.endswith(share.share_token)
    assert (share.expiration_time - clock()).total_seconds() == 24 * 3600

    shared = await note_service.get_shared_note(share.share_token)
    assert shared.title == "A"
    assert shared.content == "shared body"


async def test_share_hours_above_limit_rejected(note_service, owner_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))
    limit = note_service.settings.max_share_expiration_hours
    with pytest.raises(ValidationError):
        await note_service.share_note(owner_actor, created.id, limit + 1)


async def test_share_leaves_updated_at_alone(note_service, owner_actor, clock):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))
    clock.advance(minutes=10)

    await note_service.share_note(owner_actor, created.id, 1)
    await note_service.revoke_share(owner_actor, created.id)

    assert (await note_service.get_note(owner_actor, created.id)).updated_at == created.updated_at


async def test_scenario_expiry_then_sweep(note_service, owner_actor, scheduler, clock, test_session):
    """ttl 1h, +61 min: gone for the owner, then purged by the sweep."""
    created = await note_service.create_note(
        owner_actor, NoteCreate(title="t", content="c", expiration_hours=1)
    )
    clock.advance(minutes=61)

    with pytest.raises(NotFoundError):
        await note_service.get_note(owner_actor, created.id)

    result = await scheduler.sweep()
    assert result.notes_deleted == 1
    assert (await note_service.list_user_notes(owner_actor)).notes == []
    assert await note_service.note_repo.count_all() == 0


async def test_scenario_share_then_revoke(note_service, owner_actor):
    created = await note_service.create_note(owner_actor, NoteCreate(title="t", content="c"))
    share = await note_service.share_note(owner_actor, created.id, 24)

    assert (await note_service.get_shared_note(share.share_token)).content == "c"

    await note_service.revoke_share(owner_actor, created.id)
    with pytest.raises(NotFoundError):
        await note_service.get_shared_note(share.share_token)


async def test_scenario_admin_sees_plaintext_stranger_does_not(
    note_service, owner_actor, other_actor, test_session, cipher, clock
):
    created = await note_service.create_note(owner_actor, NoteCreate(title="A", content="secret"))

    admin_listing = await AdminService(test_session, cipher, clock=clock).list_all_notes()
    assert [(n.title, n.content) for n in admin_listing] == [("A", "secret")]

    with pytest.raises(NotFoundError):
        await note_service.get_note(other_actor, created.id)
