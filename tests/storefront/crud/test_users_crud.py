import pytest
from sqlalchemy.exc import OperationalError

from storefront.core.errors import StoreError
from storefront.crud import users as user_store


class _BrokenSession:
    def query(self, *_args, **_kwargs):
        raise OperationalError('SELECT 1', {}, Exception('database unavailable'))

    def rollback(self) -> None:
        pass


def test_find_user_by_email_is_exact_match(db, make_user) -> None:
    user = make_user(email='john@example.com')

    assert user_store.find_user_by_email(db, 'john@example.com').id == user.id
    assert user_store.find_user_by_email(db, 'JOHN@example.com') is None


def test_find_user_by_id(db, make_user) -> None:
    user = make_user()

    assert user_store.find_user_by_id(db, user.id).email == user.email
    assert user_store.find_user_by_id(db, user.id + 100) is None


def test_find_user_by_email_and_answer_needs_both(db, make_user) -> None:
    user = make_user(email='john@example.com', answer='Football')

    assert user_store.find_user_by_email_and_answer(db, 'john@example.com', 'Football').id == user.id
    assert user_store.find_user_by_email_and_answer(db, 'john@example.com', 'Soccer') is None
    assert user_store.find_user_by_email_and_answer(db, 'jane@example.com', 'Football') is None


def test_update_user_by_id_keeps_omitted_fields(db, make_user) -> None:
    user = make_user(name='John Doe')

    updated = user_store.update_user_by_id(db, user.id, name=None, phone='5555555555')

    assert updated.name == 'John Doe'
    assert updated.phone == '5555555555'
    assert updated.address == '123 Street'


def test_update_user_by_id_can_set_role_to_zero(db, make_user) -> None:
    user = make_user(role=1)

    assert user_store.update_user_by_id(db, user.id, role=0).role == 0


def test_update_user_by_id_returns_none_for_unknown_user(db) -> None:
    assert user_store.update_user_by_id(db, 404, name='Nobody') is None


def test_update_user_by_id_rejects_unknown_fields(db, make_user) -> None:
    user = make_user()

    with pytest.raises(ValueError):
        user_store.update_user_by_id(db, user.id, password='plaintext')


def test_public_user_hides_secrets(make_user) -> None:
    public = user_store.public_user(make_user())

    assert public['email'] == 'john@example.com'
    assert public['DOB'] == '2000-01-01'
    assert 'password_hash' not in public
    assert 'answer' not in public


def test_duplicate_email_surfaces_as_store_error(db, make_user) -> None:
    make_user(email='john@example.com')

    with pytest.raises(StoreError):
        make_user(email='john@example.com')


@pytest.mark.parametrize(
    'call',
    [
        lambda session: user_store.find_user_by_email(session, 'john@example.com'),
        lambda session: user_store.find_user_by_id(session, 1),
        lambda session: user_store.find_user_by_email_and_answer(session, 'john@example.com', 'Football'),
        lambda session: user_store.update_user_by_id(session, 1, name='John'),
    ],
)
def test_database_errors_become_store_errors(call) -> None:
    with pytest.raises(StoreError):
        call(_BrokenSession())
