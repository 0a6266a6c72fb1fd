from igilife.models.kv_entry import KeyValueEntry  # noqa: F401
