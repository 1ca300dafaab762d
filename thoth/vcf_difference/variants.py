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

"""Ordering of variant records by a sequence dictionary."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple, TYPE_CHECKING

from .exceptions import OrderDomainIncompatible

if TYPE_CHECKING:
    from pysam import VariantHeader


class VariantComparator:
    """Compare variant records by contig, position and alleles.

    Contigs are ordered by their position in the sequence dictionary. Records are
    expected to expose ``contig``, ``pos``, ``ref`` and ``alts`` the way
    pysam.VariantRecord does.
    """

    def __init__(self, contigs: Iterable[str]) -> None:
        """Create a comparator for the given contig names, in their sort order."""
        self.contig_index: Dict[str, int] = {}
        for contig in contigs:
            self.contig_index.setdefault(contig, len(self.contig_index))

    @classmethod
    def from_header(cls, header: VariantHeader) -> VariantComparator:
        """Create a comparator ordering contigs as declared in a VCF header."""
        return cls(header.contigs)

    def _key(self, record: Any) -> Tuple[int, int, str, Tuple[str, ...]]:
        try:
            index = self.contig_index[record.contig]
        except KeyError:
            raise OrderDomainIncompatible(
                f"Contig {record.contig!r} of record at position {record.pos} is not in the sequence dictionary"
            ) from None

        return index, record.pos, record.ref or "", tuple(record.alts or ())

    def __call__(self, first: Any, second: Any) -> int:
        """Compare two records, return a negative number, zero or a positive number."""
        first_key = self._key(first)
        second_key = self._key(second)
        return (first_key > second_key) - (first_key < second_key)

    def _find_incompatible(self, contigs: Iterable[str]) -> Optional[str]:
        for index, contig in enumerate(contigs):
            if self.contig_index.get(contig) != index:
                return contig

        return None

    def is_compatible(self, contigs: Iterable[str]) -> bool:
        """Check the given contigs appear in this dictionary at the same positions."""
        return self._find_incompatible(contigs) is None

    def ensure_compatible(self, contigs: Iterable[str], *, description: str = "input") -> None:
        """Raise OrderDomainIncompatible if the given contigs are not compatible."""
        contig = self._find_incompatible(contigs)
        if contig is not None:
            raise OrderDomainIncompatible(
                f"The contig entries in {description} are not compatible with the sequence dictionary, "
                f"first mismatch at contig {contig!r}"
            )
