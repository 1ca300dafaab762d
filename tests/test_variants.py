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

"""Test ordering of variant records."""

from collections import namedtuple

import pytest

from thoth.vcf_difference.exceptions import OrderDomainIncompatible
from thoth.vcf_difference.lazy_set_ops import sorted_iter_set_difference
from thoth.vcf_difference.variants import VariantComparator

Variant = namedtuple("Variant", ["contig", "pos", "ref", "alts"])


class TestVariantComparator:
    """Test comparing variants by a sequence dictionary."""

    @pytest.fixture
    def comparator(self) -> VariantComparator:
        return VariantComparator(["chr2", "chr10", "chr1"])

    def test_contig_order(self, comparator) -> None:
        assert comparator(Variant("chr2", 500, "A", ("T",)), Variant("chr10", 1, "A", ("T",))) < 0
        assert comparator(Variant("chr1", 1, "A", ("T",)), Variant("chr10", 500, "A", ("T",))) > 0

    def test_position(self, comparator) -> None:
        assert comparator(Variant("chr1", 9, "A", ("T",)), Variant("chr1", 10, "A", ("T",))) < 0
        assert comparator(Variant("chr1", 10, "A", ("T",)), Variant("chr1", 9, "A", ("T",))) > 0

    def test_alleles(self, comparator) -> None:
        assert comparator(Variant("chr1", 10, "A", ("C",)), Variant("chr1", 10, "A", ("T",))) < 0
        assert comparator(Variant("chr1", 10, "G", ("C",)), Variant("chr1", 10, "A", ("T",))) > 0
        assert comparator(Variant("chr1", 10, "A", None), Variant("chr1", 10, "A", ("T",))) < 0

    def test_equal(self, comparator) -> None:
        assert comparator(Variant("chr10", 7, "AC", ("A", "G")), Variant("chr10", 7, "AC", ("A", "G"))) == 0

    def test_unknown_contig(self, comparator) -> None:
        with pytest.raises(OrderDomainIncompatible):
            comparator(Variant("chrX", 1, "A", ("T",)), Variant("chr1", 1, "A", ("T",)))

    def test_duplicate_contigs(self) -> None:
        comparator = VariantComparator(["chr1", "chr2", "chr1"])
        assert comparator.contig_index == {"chr1": 0, "chr2": 1}

    @pytest.mark.parametrize(
        "contigs,compatible",
        [
            (["chr2", "chr10", "chr1"], True),
            (["chr2", "chr10"], True),
            ([], True),
            (["chr10", "chr2", "chr1"], False),
            (["chr2", "chrX"], False),
            (["chr10"], False),
        ],
    )
    def test_is_compatible(self, comparator, contigs, compatible) -> None:
        assert comparator.is_compatible(contigs) is compatible

    def test_ensure_compatible(self, comparator) -> None:
        comparator.ensure_compatible(["chr2"])
        with pytest.raises(OrderDomainIncompatible, match="chrX"):
            comparator.ensure_compatible(["chr2", "chrX"], description="second.vcf")


def test_difference_multiallelic() -> None:
    """Test records sharing a position differ by their alleles."""
    comparator = VariantComparator(["chr1", "chr2"])
    source = [
        Variant("chr1", 100, "A", ("C",)),
        Variant("chr1", 100, "A", ("T",)),
        Variant("chr1", 100, "A", ("T",)),
        Variant("chr1", 200, "G", ("A",)),
        Variant("chr2", 100, "A", ("C",)),
    ]
    dest = [
        Variant("chr1", 100, "A", ("T",)),
        Variant("chr1", 150, "C", ("G",)),
        Variant("chr2", 100, "A", ("C",)),
    ]

    assert list(sorted_iter_set_difference(source, dest, comparator)) == [
        Variant("chr1", 100, "A", ("C",)),
        Variant("chr1", 200, "G", ("A",)),
    ]
