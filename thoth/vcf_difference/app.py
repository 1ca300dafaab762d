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

"""Output records present in the first VCF file but not in the second one."""

from __future__ import annotations

import logging
import os
from enum import Enum
from importlib_metadata import version
from typing import Optional

import click
from thoth.common import init_logging

from prometheus_client import CollectorRegistry, Gauge, Counter as PromCounter, push_to_gateway

from .exceptions import VCFDifferenceException
from .vcf import difference_files
from .vcf import DifferenceStats
from .vcf import DEFAULT_PROGRESS_INTERVAL

prometheus_registry = CollectorRegistry()

__component_version__ = version("thoth-vcf-difference")

init_logging()
_LOGGER = logging.getLogger("thoth.vcf_difference")

_THOTH_DEPLOYMENT_NAME = os.getenv("THOTH_DEPLOYMENT_NAME", "local")
_THOTH_METRICS_PUSHGATEWAY_URL = os.getenv("PROMETHEUS_PUSHGATEWAY_URL")

# Metrics VCF difference
_METRIC_INFO = Gauge(
    "thoth_vcf_difference_job_info",
    "Thoth VCF Difference Job information",
    ["env", "version"],
    registry=prometheus_registry,
)

_METRIC_RECORDS_NUMBER = PromCounter(
    "thoth_vcf_difference_job_records",
    "Thoth VCF Difference Job number of records of the first file by result",
    ["result", "env", "version"],
    registry=prometheus_registry,
)

_METRIC_CONSUMED_NUMBER = PromCounter(
    "thoth_vcf_difference_job_consumed",
    "Thoth VCF Difference Job number of records consumed from the second file",
    ["env", "version"],
    registry=prometheus_registry,
)

_METRIC_RUNS_NUMBER = PromCounter(
    "thoth_vcf_difference_job_runs",
    "Thoth VCF Difference Job number of runs by result",
    ["result", "env", "version"],
    registry=prometheus_registry,
)

_METRIC_INFO.labels(_THOTH_DEPLOYMENT_NAME, __component_version__).inc()


class _RecordResult(Enum):
    EMITTED = "emitted"
    SUPPRESSED = "suppressed"


class _RunResult(Enum):
    SUCCESS = "success"
    ERROR = "error"


def _push_metrics(stats: DifferenceStats, run_result: _RunResult) -> None:
    """Record run statistics and submit them to the pushgateway, if configured."""
    _METRIC_RUNS_NUMBER.labels(
        result=run_result.value,
        env=_THOTH_DEPLOYMENT_NAME,
        version=__component_version__,
    ).inc()

    for result, amount in ((_RecordResult.EMITTED, stats.emitted), (_RecordResult.SUPPRESSED, stats.suppressed)):
        _METRIC_RECORDS_NUMBER.labels(
            result=result.value,
            env=_THOTH_DEPLOYMENT_NAME,
            version=__component_version__,
        ).inc(amount)

    _METRIC_CONSUMED_NUMBER.labels(env=_THOTH_DEPLOYMENT_NAME, version=__component_version__).inc(stats.consumed)

    if not _THOTH_METRICS_PUSHGATEWAY_URL:
        return

    try:
        _LOGGER.debug(f"Submitting metrics to Prometheus pushgateway {_THOTH_METRICS_PUSHGATEWAY_URL}")
        push_to_gateway(
            _THOTH_METRICS_PUSHGATEWAY_URL,
            job="vcf-difference-job",
            registry=prometheus_registry,
        )
    except Exception as e:
        _LOGGER.exception(f"An error occurred pushing the metrics: {str(e)}")


@click.command()
@click.option("--debug", is_flag=True, help="Run in a debug mode", envvar="THOTH_VCF_DIFFERENCE_DEBUG", default=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    required=True,
    help="Output VCF or BCF file, a .vcf.gz suffix produces bgzipped output.",
    envvar="THOTH_VCF_DIFFERENCE_OUTPUT",
)
@click.option(
    "--sequence-dictionary",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help=(
        "Sequence dictionary (.dict, SAM/BAM or VCF) declaring the output header contigs, "
        "contigs of FIRST have to come first and in the same order."
    ),
    envvar="THOTH_VCF_DIFFERENCE_SEQUENCE_DICTIONARY",
    default=None,
)
@click.option(
    "--create-index/--no-create-index",
    help="Index the output, tabix for .vcf.gz and CSI for .bcf, plain VCF is not indexed.",
    envvar="THOTH_VCF_DIFFERENCE_CREATE_INDEX",
    default=True,
)
@click.option(
    "--check-order",
    is_flag=True,
    help="Fail on the first record found out of order instead of assuming sorted inputs.",
    envvar="THOTH_VCF_DIFFERENCE_CHECK_ORDER",
    default=False,
)
@click.option(
    "--progress-interval",
    type=click.IntRange(min=0),
    help="Log progress every given number of records of the first file, 0 turns progress logging off.",
    envvar="THOTH_VCF_DIFFERENCE_PROGRESS_INTERVAL",
    default=DEFAULT_PROGRESS_INTERVAL,
)
@click.argument("first", type=click.Path(exists=True, dir_okay=False, readable=True), metavar="FIRST")
@click.argument("second", type=click.Path(exists=True, dir_okay=False, readable=True), metavar="SECOND")
def difference(
    first: str,
    second: str,
    output: str,
    debug: bool,
    sequence_dictionary: Optional[str],
    create_index: bool,
    check_order: bool,
    progress_interval: int,
) -> None:
    """Output records that are present in FIRST but not in SECOND, both files need to be sorted."""
    if debug:
        _LOGGER.setLevel(logging.DEBUG)
        _LOGGER.debug("Debug mode is on.")

    _LOGGER.info("Running VCF difference job in version %r", __component_version__)
    _LOGGER.info("Computing %r minus %r into %r", first, second, output)

    stats = DifferenceStats()
    run_result = _RunResult.ERROR
    try:
        difference_files(
            first,
            second,
            output,
            sequence_dictionary=sequence_dictionary,
            create_index=create_index,
            check_order=check_order,
            progress_interval=progress_interval,
            stats=stats,
        )
        run_result = _RunResult.SUCCESS
    except VCFDifferenceException as exc:
        _LOGGER.exception("Failed to compute the difference of %r and %r", first, second)
        raise click.ClickException(str(exc)) from exc
    finally:
        _push_metrics(stats, run_result)

    _LOGGER.info(
        "Summary: %d records read, %d %s, %d %s, %d records consumed from %r",
        stats.read,
        stats.emitted,
        _RecordResult.EMITTED.value,
        stats.suppressed,
        _RecordResult.SUPPRESSED.value,
        stats.consumed,
        second,
    )
    _LOGGER.info("VCF difference job has finished successfully")
