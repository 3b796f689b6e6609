"""Address-to-symbol index with floor lookup."""

from __future__ import annotations

from bisect import bisect_right

from bincall.core.exceptions import DuplicateEntryPointError, EntryPointUnsetError
from bincall.core.models import UNDEFINED_ADDRESS, Symbol


class SymbolTable:
    """Function symbols of a binary, keyed by start address.

    A function is assumed to span from its symbol address up to (not
    including) the next higher symbol address, so any instruction address
    resolves to its enclosing function by floor search.

    The index is sorted lazily: symbol dumps are usually near-sorted, so an
    out-of-order insert only sets a flag and the next lookup re-sorts.

    Known quirk: only an address equal to the *most recently inserted* one is
    dropped as a duplicate (the first name wins). A duplicate separated by
    other inserts replaces the stored name instead (the last name wins),
    while the address stays registered once. Lookups depend on this, so it is
    kept as is rather than normalized to a single rule.
    """

    __slots__ = ("_addresses", "_names", "_sorted", "_last_added", "_entry_point")

    def __init__(self) -> None:
        self._addresses: list[int] = []
        self._names: dict[int, str] = {}
        self._sorted = True
        self._last_added: int | None = None
        self._entry_point: int | None = None

    @property
    def entry_point(self) -> int:
        """Program entry address. Raises if it was never recorded."""
        if self._entry_point is None:
            raise EntryPointUnsetError("Entry point undefined")
        return self._entry_point

    @entry_point.setter
    def entry_point(self, address: int) -> None:
        if self._entry_point is not None:
            raise DuplicateEntryPointError(
                f"Duplicate entry point {address:#x} (already {self._entry_point:#x})"
            )
        self._entry_point = address

    @property
    def has_entry_point(self) -> bool:
        return self._entry_point is not None

    def add(self, address: int, name: str) -> None:
        """Register a symbol. O(1) amortized."""
        if address == UNDEFINED_ADDRESS:
            return
        if address == self._last_added:
            return
        self._last_added = address

        if address in self._names:
            self._names[address] = name
            return

        if self._addresses and address < self._addresses[-1]:
            self._sorted = False
        self._addresses.append(address)
        self._names[address] = name

    def lookup(self, address: int) -> str | None:
        """Name of the function containing ``address``, or None. O(log n)."""
        symbol = self.resolve(address)
        return symbol.name if symbol is not None else None

    def resolve(self, address: int) -> Symbol | None:
        """Enclosing symbol (start address and name) of ``address``, or None."""
        self._ensure_sorted()
        index = bisect_right(self._addresses, address) - 1
        if index < 0:
            return None
        start = self._addresses[index]
        return Symbol(address=start, name=self._names[start])

    def address_of(self, name: str) -> int | None:
        """Lowest address registered under ``name``, or None. O(n)."""
        self._ensure_sorted()
        for address in self._addresses:
            if self._names[address] == name:
                return address
        return None

    def symbols(self) -> list[Symbol]:
        """All symbols in ascending address order."""
        self._ensure_sorted()
        return [Symbol(address=a, name=self._names[a]) for a in self._addresses]

    def _ensure_sorted(self) -> None:
        if not self._sorted:
            self._addresses.sort()
            self._sorted = True

    def __len__(self) -> int:
        return len(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._names

    def __repr__(self) -> str:
        entry = f"{self._entry_point:#x}" if self._entry_point is not None else None
        return f"SymbolTable(symbols={len(self)}, entry_point={entry})"
