"""Tests for the merge-on-write credential stores."""

import json
import os
import platform
from pathlib import Path

import pytest

from errors import StorageError
from utils.storage import FileCredentialStore, MemoryCredentialStore


@pytest.fixture
def token_file(tmp_path: Path) -> Path:
    return tmp_path / 'nested' / 'tokens.json'


def test_read_empty_file_store(token_file: Path) -> None:
    store = FileCredentialStore(str(token_file))
    assert store.read() == {}
    assert store.get('refresh_token') is None


def test_merge_is_field_union(token_file: Path) -> None:
    store = FileCredentialStore(str(token_file))
    store.merge({'a': 1})
    store.merge({'b': 2})

    assert store.read() == {'a': 1, 'b': 2}


def test_merge_overwrites_only_given_fields(token_file: Path) -> None:
    store = FileCredentialStore(str(token_file))
    store.merge({'code_verifier': 'v1', 'state': 's1'})
    store.merge({'access_token': 'at', 'refresh_token': 'rt'})
    store.merge({'refresh_token': 'rt2'})

    assert store.read() == {'code_verifier': 'v1', 'state': 's1', 'access_token': 'at', 'refresh_token': 'rt2'}


def test_record_survives_new_instance(token_file: Path) -> None:
    FileCredentialStore(str(token_file)).merge({'refresh_token': 'rt'})
    assert FileCredentialStore(str(token_file)).read() == {'refresh_token': 'rt'}


def test_record_is_stored_under_record_key(token_file: Path) -> None:
    FileCredentialStore(str(token_file), record_key='demo').merge({'state': 's'})
    FileCredentialStore(str(token_file), record_key='other').merge({'state': 't'})

    data = json.loads(token_file.read_text())
    assert data == {'demo': {'state': 's'}, 'other': {'state': 't'}}


def test_no_temp_files_left_behind(token_file: Path) -> None:
    store = FileCredentialStore(str(token_file))
    store.merge({'a': 1})
    store.merge({'b': 2})

    assert [p.name for p in token_file.parent.iterdir()] == ['tokens.json']


@pytest.mark.skipif(platform.system() == 'Windows', reason='POSIX permissions')
def test_file_permissions_are_owner_only(token_file: Path) -> None:
    FileCredentialStore(str(token_file)).merge({'a': 1})
    assert os.stat(token_file).st_mode & 0o777 == 0o600


def test_corrupt_file_raises_storage_error(token_file: Path) -> None:
    token_file.parent.mkdir(parents=True)
    token_file.write_text('{not json')
    store = FileCredentialStore(str(token_file))

    with pytest.raises(StorageError):
        store.read()
    with pytest.raises(StorageError):
        store.merge({'a': 1})
    assert token_file.read_text() == '{not json'


def test_non_object_record_raises_storage_error(token_file: Path) -> None:
    token_file.parent.mkdir(parents=True)
    token_file.write_text(json.dumps({'default': ['x']}))

    with pytest.raises(StorageError):
        FileCredentialStore(str(token_file)).read()


def test_unwritable_location_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / 'blocker'
    blocker.write_text('a file, not a directory')
    store = FileCredentialStore(str(blocker / 'tokens.json'))

    with pytest.raises(StorageError):
        store.merge({'a': 1})


def test_read_returns_a_copy() -> None:
    store = MemoryCredentialStore({'nested': {'x': 1}})
    snapshot = store.read()
    snapshot['nested']['x'] = 2
    snapshot['extra'] = True

    assert store.read() == {'nested': {'x': 1}}


def test_memory_store_merge_and_status() -> None:
    store = MemoryCredentialStore()
    assert store.status() == {
        'has_pending_authorization': False,
        'is_authorized': False,
        'has_access_token': False,
        'location': 'memory',
    }

    store.merge({'code_verifier': 'v', 'state': 's'})
    store.merge({'access_token': 'a', 'refresh_token': 'r'})

    status = store.status()
    assert status['has_pending_authorization'] is True
    assert status['is_authorized'] is True
    assert status['has_access_token'] is True


def test_token_file_expands_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('HOME', str(tmp_path))
    store = FileCredentialStore('~/bot/tokens.json')

    store.merge({'refresh_token': 'r0'})

    assert store.token_file == tmp_path / 'bot' / 'tokens.json'
    assert (tmp_path / 'bot' / 'tokens.json').exists()
