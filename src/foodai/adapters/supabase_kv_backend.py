"""Supabase table used as the key/value backend."""

from dataclasses import dataclass

from supabase import Client

from foodai.services.store import KeyValueBackend


@dataclass
class SupabaseKeyValueBackend(KeyValueBackend):
    """Stores each key as a row with ``key`` and ``value`` text columns."""

    client: Client
    table: str = "kv_store"

    def get_raw(self, key: str) -> str | None:
        """Return the stored text for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set_many(self, items: dict[str, str]) -> None:
        """Upsert all items in a single request."""
        payload = [{"key": key, "value": value} for key, value in items.items()]
        self.client.table(self.table).upsert(payload, on_conflict="key").execute()

    def delete(self, key: str) -> None:
        """Delete a key's row."""
        self.client.table(self.table).delete().eq("key", key).execute()
