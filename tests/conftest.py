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

"""Shared fixtures for tests."""

import pytest

_HEADER = """##fileformat=VCFv4.2
{contigs}
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
"""


@pytest.fixture
def write_vcf(tmp_path):
    """Write a plain text VCF file with the given contigs and (contig, pos, ref, alt) records."""

    def _write_vcf(name, records, contigs=("chr1", "chr2")):
        path = tmp_path / name
        contig_lines = "\n".join(f"##contig=<ID={contig},length=10000>" for contig in contigs)
        lines = [f"{contig}\t{pos}\t.\t{ref}\t{alt}\t.\t.\t." for contig, pos, ref, alt in records]
        path.write_text(_HEADER.format(contigs=contig_lines) + "".join(line + "\n" for line in lines))
        return str(path)

    return _write_vcf
