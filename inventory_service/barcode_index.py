from typing import Iterator


class BarcodeIndex:
    """Secondary unique key: barcode -> item_id. Kept consistent by the store."""

    def __init__(self):
        self._entries: dict[str, str] = {}

    def lookup(self, barcode: str) -> str | None:
        return self._entries.get(barcode)

    def put(self, barcode: str, item_id: str):
        self._entries[barcode] = item_id

    def discard(self, barcode: str):
        self._entries.pop(barcode, None)

    def replace_all(self, entries: list[tuple[str, str]]):
        self._entries = dict(entries)

    def entries(self) -> list[tuple[str, str]]:
        return list(self._entries.items())

    def __contains__(self, barcode: str) -> bool:
        return barcode in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
