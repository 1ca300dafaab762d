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

"""Reading and writing VCF/BCF files for the difference job."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import pysam
from pysam import bcftools

from .lazy_set_ops import OrderedCursor
from .lazy_set_ops import sorted_iter_set_difference
from .variants import VariantComparator

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 10000
_VARIANT_SUFFIXES = (".vcf", ".vcf.gz", ".vcf.bgz", ".bcf")

SequenceDictionary = List[Tuple[str, Optional[int]]]


@dataclass
class DifferenceStats:
    """Number of records seen while computing a difference."""

    read: int = 0
    emitted: int = 0
    consumed: int = 0

    @property
    def suppressed(self) -> int:
        return self.read - self.emitted


def open_variants(path: str) -> pysam.VariantFile:
    """Open a VCF or BCF file for reading."""
    return pysam.VariantFile(str(path))


def output_mode(path: str) -> str:
    """Get pysam write mode for the given output file name."""
    name = str(path)
    if name.endswith((".vcf.gz", ".vcf.bgz")):
        return "wz"
    elif name.endswith(".bcf"):
        return "wb"

    return "w"


def read_sequence_dictionary(path: str) -> SequenceDictionary:
    """Read contig names and lengths from a VCF/BCF header, a Picard .dict or a SAM/BAM/CRAM header."""
    if str(path).endswith(_VARIANT_SUFFIXES):
        with pysam.VariantFile(str(path)) as variants:
            return [(contig.name, contig.length) for contig in variants.header.contigs.values()]

    if str(path).endswith(".dict"):
        with open(path) as dictionary_file:
            header = pysam.AlignmentHeader.from_text(dictionary_file.read())
        return list(zip(header.references, header.lengths))

    with pysam.AlignmentFile(str(path), check_sq=False) as alignments:
        return list(zip(alignments.references, alignments.lengths))


def build_output_header(
    header: pysam.VariantHeader, sequence_dictionary: Optional[SequenceDictionary] = None
) -> pysam.VariantHeader:
    """Copy the header, declaring contigs in the order of the sequence dictionary.

    Contigs of the header have to be a prefix of the dictionary, as records keep their
    contig ids. OrderDomainIncompatible is raised otherwise.
    """
    result = header.copy()
    if not sequence_dictionary:
        return result

    dictionary = VariantComparator(name for name, _ in sequence_dictionary)
    dictionary.ensure_compatible(header.contigs, description="the first file header")
    for name, length in sequence_dictionary:
        if name not in result.contigs:
            result.contigs.add(name, length=length)

    return result


def index_output(path: str) -> Optional[str]:
    """Index bgzipped VCF (tabix) or BCF (CSI) output, return the path to the index if created."""
    mode = output_mode(path)
    if mode == "wz":
        pysam.tabix_index(str(path), preset="vcf", force=True)
        index = f"{path}.tbi"
    elif mode == "wb":
        bcftools.index("--force", str(path))
        index = f"{path}.csi"
    else:
        _LOGGER.warning("Plain text VCF output cannot be indexed, not indexing %r", path)
        return None

    _LOGGER.debug("Created index %r", index)
    return index


def log_progress(
    records: Iterable[pysam.VariantRecord], interval: int = DEFAULT_PROGRESS_INTERVAL
) -> Iterator[pysam.VariantRecord]:
    """Pass records through, logging every interval records the position reached."""
    count = 0
    for record in records:
        count += 1
        if interval > 0 and count % interval == 0:
            _LOGGER.info("Processed %d records, last read position %s:%d", count, record.contig, record.pos)
        yield record


def difference_files(
    first: str,
    second: str,
    output: str,
    *,
    sequence_dictionary: Optional[str] = None,
    create_index: bool = True,
    check_order: bool = False,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    stats: Optional[DifferenceStats] = None,
) -> DifferenceStats:
    """Write records of the first file that are not present in the second file to output.

    Both files need to be sorted by the contig order of the first file header. An
    OrderDomainIncompatible is raised before anything is written if the contigs of the
    second file do not follow that order.

    Counts are kept in stats, if given, so they stay available when the run fails.
    """
    stats = stats if stats is not None else DifferenceStats()

    with open_variants(first) as first_reader, open_variants(second) as second_reader:
        comparator = VariantComparator.from_header(first_reader.header)
        comparator.ensure_compatible(second_reader.header.contigs, description=str(second))

        dictionary = None
        if sequence_dictionary is not None:
            dictionary = read_sequence_dictionary(sequence_dictionary)
            _LOGGER.info("Using sequence dictionary from %r with %d contigs", sequence_dictionary, len(dictionary))

        header = build_output_header(first_reader.header, dictionary)

        source = OrderedCursor(log_progress(first_reader, progress_interval))
        dest = OrderedCursor(second_reader)

        try:
            with pysam.VariantFile(str(output), output_mode(output), header=header) as writer:
                for record in sorted_iter_set_difference(source, dest, comparator, check_order=check_order):
                    writer.write(record)
                    stats.emitted += 1
        finally:
            stats.read = source.consumed
            stats.consumed = dest.consumed

    if create_index:
        index_output(output)

    return stats
