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

"""Exceptions raised while computing VCF differences."""


class VCFDifferenceException(Exception):
    """A base class for exceptions in this package."""


class ExhaustedError(VCFDifferenceException):
    """Raised when an ordered cursor is advanced past its last element."""


class OrderDomainIncompatible(VCFDifferenceException):
    """Raised when two inputs cannot be compared under the same contig order."""


class PreconditionViolation(VCFDifferenceException):
    """Raised when an input is detected not to be sorted."""
