# thoth-vcf-difference
# Copyright(C) 2022 Red Hat, Inc.
#
# This program is free software: you can redistribute it and / or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <http://www.gnu.org/licenses/>.

"""Lazy set-like operations on sorted iterables."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from .exceptions import ExhaustedError
from .exceptions import PreconditionViolation

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]

_MISSING = object()


def natural_compare(first: Any, second: Any) -> int:
    """Compare two items using their own ordering, only ``<`` is required."""
    if first < second:
        return -1
    if second < first:
        return 1
    return 0


class OrderedCursor(Generic[T]):
    """A forward-only cursor over an iterable holding at most one lookahead element."""

    def __init__(self, iterable: Iterable[T]) -> None:
        """Wrap the given iterable, nothing is read until asked for."""
        self._iterator = iter(iterable)
        self._lookahead: Any = _MISSING
        self.consumed = 0

    def has_next(self) -> bool:
        """Check whether there is another element to be returned by next()."""
        if self._lookahead is _MISSING:
            self._lookahead = next(self._iterator, _MISSING)
        return self._lookahead is not _MISSING

    def next(self) -> T:
        """Return the next element, raise ExhaustedError if there is none."""
        if not self.has_next():
            raise ExhaustedError(f"No more elements, cursor was exhausted after {self.consumed} elements")

        item, self._lookahead = self._lookahead, _MISSING
        self.consumed += 1
        return item

    def __iter__(self) -> OrderedCursor[T]:
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next()


def as_cursor(iterable: Iterable[T]) -> OrderedCursor[T]:
    """Wrap an iterable into a cursor unless it already is one."""
    if isinstance(iterable, OrderedCursor):
        return iterable
    return OrderedCursor(iterable)


def ensure_sorted(iterable: Iterable[T], compare: Comparator, name: str = "input") -> Iterator[T]:
    """Pass items through, raise PreconditionViolation on the first one out of order."""
    previous: Any = _MISSING
    for item in iterable:
        if previous is not _MISSING and compare(previous, item) > 0:
            raise PreconditionViolation(f"The {name} is not sorted: {item!r} follows {previous!r}")
        previous = item
        yield item


def seek_ceiling(
    target: T, cursor: OrderedCursor[T], compare: Comparator, prior_ceiling: Optional[T] = None
) -> Optional[T]:
    """Find the smallest element not less than target, moving the cursor forward only.

    The prior ceiling is returned untouched if it is still not less than target, otherwise
    the cursor is advanced until an element not less than target is found. None is returned
    once the cursor is exhausted.
    """
    if prior_ceiling is not None and compare(target, prior_ceiling) <= 0:
        return prior_ceiling

    while cursor.has_next():
        item = cursor.next()
        if compare(target, item) <= 0:
            return item

    return None


def sorted_iter_set_difference(
    source: Iterable[T],
    dest: Iterable[T],
    compare: Optional[Comparator] = None,
    *,
    check_order: bool = False,
) -> Iterator[T]:
    """Compute the set difference of two sorted iterables.

    Items of source are yielded in their original order unless an equal item (as
    told by compare) exists in dest. This is an existence test: several equal items
    in source are all dropped by a single equal item in dest.

    Both iterables have to be sorted by compare, this is not verified unless
    check_order is set.
    """
    compare = compare or natural_compare
    if check_order:
        source = ensure_sorted(source, compare, name="source")
        dest = ensure_sorted(dest, compare, name="dest")

    _source = as_cursor(source)
    _dest = as_cursor(dest)
    ceiling: Optional[T] = None

    while _source.has_next():
        s = _source.next()
        ceiling = seek_ceiling(s, _dest, compare, ceiling)
        if ceiling is None:
            # dest is exhausted, nothing left to match against
            yield s
            break
        elif compare(s, ceiling) < 0:
            yield s

    yield from _source
