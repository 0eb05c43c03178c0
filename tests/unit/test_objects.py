"""Commit object tests."""

import hashlib
import json
import pytest
from dotgit.core.objects import CommitObject
from dotgit.core.exceptions import CorruptObjectError
from tests.conftest import make_entry

TIMESTAMP = '2024-05-01T12:00:00.000Z'


@pytest.fixture
def files():
    return [make_entry('a.txt', b'hello'), make_entry('b/c.txt', b'world!')]


def test_commit_fields(files):
    """Test a commit keeps its fields in order."""
    commit = CommitObject('first', TIMESTAMP, files)
    assert commit.message == 'first'
    assert commit.timestamp == TIMESTAMP
    assert [e.path for e in commit.files] == ['a.txt', 'b/c.txt']
    assert commit.total_size == 11
    assert len(commit.id) == 40


def test_commit_id_is_deterministic(files):
    """Test identical fields give identical ids."""
    first = CommitObject('msg', TIMESTAMP, files)
    second = CommitObject('msg', TIMESTAMP, [make_entry('a.txt', b'hello'),
                                             make_entry('b/c.txt', b'world!')])
    assert first.id == second.id
    assert first == second


@pytest.mark.parametrize('change', ['message', 'timestamp', 'content', 'path', 'staged_at', 'order'])
def test_commit_id_changes_with_any_field(files, change):
    """Test every field contributes to the id."""
    base = CommitObject('msg', TIMESTAMP, files)

    message, timestamp, changed = 'msg', TIMESTAMP, list(files)
    if change == 'message':
        message = 'other'
    elif change == 'timestamp':
        timestamp = '2024-05-01T12:00:00.001Z'
    elif change == 'content':
        changed[0] = make_entry('a.txt', b'hellO')
    elif change == 'path':
        changed[0] = make_entry('A.txt', b'hello')
    elif change == 'staged_at':
        changed[0] = make_entry('a.txt', b'hello', staged_at='2030-01-01T00:00:00.000Z')
    else:
        changed.reverse()

    assert CommitObject(message, timestamp, changed).id != base.id


def test_commit_id_is_read_only(files):
    """Test the id cannot be assigned."""
    commit = CommitObject('msg', TIMESTAMP, files)
    with pytest.raises(AttributeError):
        commit.id = 'f' * 40


def test_commit_is_immutable(files):
    """Test fields cannot be reassigned or extended."""
    commit = CommitObject('msg', TIMESTAMP, files)
    with pytest.raises(AttributeError):
        commit.message = 'rewritten'
    with pytest.raises(AttributeError):
        commit.author = 'someone'
    files.append(make_entry('late.txt', b'late'))
    assert len(commit.files) == 2


@pytest.mark.parametrize('message', ['', '   ', None])
def test_empty_message_rejected(files, message):
    """Test commits need a message."""
    with pytest.raises(ValueError):
        CommitObject(message, TIMESTAMP, files)


def test_create_defaults_timestamp(files):
    """Test create stamps the current time."""
    commit = CommitObject.create('msg', files)
    assert commit.timestamp.endswith('Z')


def test_serialize_includes_id(files):
    """Test stored form is JSON carrying the derived id."""
    commit = CommitObject('msg', TIMESTAMP, files)
    payload = json.loads(commit.serialize())
    assert payload['id'] == commit.id
    assert payload['message'] == 'msg'
    assert payload['files'][0]['path'] == 'a.txt'
    assert payload['files'][0]['size'] == 5


def test_deserialize_restores_commit(files):
    """Test reading back the stored form."""
    commit = CommitObject('msg', TIMESTAMP, files)
    restored = CommitObject.deserialize(commit.serialize(), expected_id=commit.id)
    assert restored == commit
    assert restored.files[1].content == b'world!'


@pytest.mark.parametrize('data', [
    b'not json',
    b'[]',
    b'{"message": "m", "timestamp": "t"}',
    b'{"message": "", "timestamp": "t", "files": []}',
    b'{"message": "m", "timestamp": "t", "files": [{"path": "a"}]}',
    b'\xff\xfe',
])
def test_deserialize_corrupt(data):
    """Test undecodable objects raise CorruptObjectError."""
    with pytest.raises(CorruptObjectError):
        CommitObject.deserialize(data)


def test_deserialize_detects_tampering(files):
    """Test edited content no longer matches its id."""
    commit = CommitObject('msg', TIMESTAMP, files)
    payload = json.loads(commit.serialize())
    payload['message'] = 'edited'

    with pytest.raises(CorruptObjectError, match="mismatch"):
        CommitObject.deserialize(json.dumps(payload).encode())


def test_deserialize_checks_expected_id(files):
    """Test an object stored under the wrong name is corrupt."""
    commit = CommitObject('msg', TIMESTAMP, files)
    with pytest.raises(CorruptObjectError):
        CommitObject.deserialize(commit.serialize(), expected_id='0' * 40)


def test_commit_id_is_sha1_of_canonical_bytes(files):
    """Test the id is the SHA-1 hex digest of the canonical encoding."""
    commit = CommitObject('msg', TIMESTAMP, files)
    assert commit.id == hashlib.sha1(commit.canonical_bytes()).hexdigest()
    assert all(c in '0123456789abcdef' for c in commit.id)
