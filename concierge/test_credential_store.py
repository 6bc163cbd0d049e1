"""
Credential store tests
"""

from concierge.interfaces.credential_store import CredentialStore


class DictRedis:
    """Just enough of the redis client API for the store"""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def ping(self):
        return True


KEY = "test:gemini_api_key"


def test_configured_value_is_trimmed():
    store = CredentialStore(configured="  abc  ", use_redis=False)
    assert store.get() == "abc"
    assert store.has_credential()
    assert store.source == "environment"


def test_absent_credential():
    store = CredentialStore(configured="", use_redis=False)
    assert store.get() == ""
    assert not store.has_credential()
    assert store.source == "none"


def test_set_trims_and_persists():
    redis = DictRedis()
    store = CredentialStore(configured="", redis_client=redis, storage_key=KEY)

    store.set("  new-key\n")

    assert store.get() == "new-key"
    assert store.source == "override"
    assert redis.data[KEY] == "new-key"


def test_empty_set_clears_persisted_entry():
    redis = DictRedis({KEY: "saved"})
    store = CredentialStore(configured="env-key", redis_client=redis, storage_key=KEY)

    store.set("   ")

    assert store.get() == ""
    assert not store.has_credential()
    assert KEY not in redis.data


def test_persisted_override_wins_over_configured():
    redis = DictRedis({KEY: "saved"})
    store = CredentialStore(configured="env-key", redis_client=redis, storage_key=KEY)

    assert store.get() == "saved"
    assert store.source == "override"


def test_memory_only_store_keeps_value():
    store = CredentialStore(configured="", use_redis=False)
    store.set("k1")
    assert store.get() == "k1"
