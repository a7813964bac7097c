"""Concurrent aggregation of the four idle-resource sources."""
from concurrent.futures import ThreadPoolExecutor, as_completed, TimeoutError as FuturesTimeoutError
from typing import List, Optional, Sequence, Type
import logging

from .config import WasteManagerConfig, get_config
from .scanners import BaseScanner, DEFAULT_SCANNERS
from .types import InventoryReport, Resource, ResourceType, SourceResult
from .utils import UpstreamProviderError

logger = logging.getLogger(__name__)


class Aggregator:
    """Runs every scanner concurrently and merges their output."""

    def __init__(
        self,
        config: Optional[WasteManagerConfig] = None,
        scanners: Optional[Sequence[BaseScanner]] = None,
        scanner_classes: Sequence[Type[BaseScanner]] = DEFAULT_SCANNERS
    ):
        """
        Initialize the aggregator.

        Args:
            config: Settings to use; the region is taken from here
            scanners: Pre-built scanners, mainly for tests
            scanner_classes: Scanner classes to instantiate when ``scanners`` is not given
        """
        self.config = config or get_config()
        self.region = self.config.region
        if scanners is None:
            scanners = [cls(self.region, self.config) for cls in scanner_classes]
        self.scanners: List[BaseScanner] = list(scanners)

    def collect(self) -> InventoryReport:
        """
        Run all scanners and return one outcome per source.

        With ``partial_results`` disabled the first failing source aborts the
        whole call.

        Returns:
            InventoryReport with sources in canonical order

        Raises:
            UpstreamProviderError: In fail-fast mode, if any source fails or
                times out; in partial mode, if every source does
        """
        fail_fast = not self.config.partial_results
        results = {}

        logger.info(
            f"Collecting idle resources in {self.region} from {len(self.scanners)} sources",
            extra={'region': self.region, 'sources': len(self.scanners)}
        )

        executor = ThreadPoolExecutor(max_workers=max(1, self.config.max_concurrent_sources))
        try:
            future_to_scanner = {
                executor.submit(scanner.scan_with_error_handling): scanner
                for scanner in self.scanners
            }

            try:
                for future in as_completed(future_to_scanner, timeout=self.config.provider_timeout):
                    scanner = future_to_scanner[future]
                    result: SourceResult = future.result()
                    results[scanner.resource_type] = result

                    if not result.ok:
                        logger.error(
                            f"Failed to scan {scanner.resource_type.value}: {result.error}",
                            extra={'source': scanner.resource_type.value, 'region': self.region}
                        )
                        if fail_fast:
                            raise UpstreamProviderError(result.error)
                    else:
                        logger.info(
                            f"Found {len(result.resources)} {scanner.resource_type.value} resources",
                            extra={
                                'source': scanner.resource_type.value,
                                'resource_count': len(result.resources),
                                'duration': result.duration
                            }
                        )
            except FuturesTimeoutError:
                pending = [s for s in self.scanners if s.resource_type not in results]
                reason = f"timed out after {self.config.provider_timeout}s"
                logger.error(
                    f"Sources still pending after timeout: {', '.join(s.resource_type.value for s in pending)}",
                    extra={'region': self.region}
                )
                if fail_fast:
                    raise UpstreamProviderError(
                        f"{pending[0].resource_type.value} scan in {self.region} {reason}"
                    )
                for scanner in pending:
                    results[scanner.resource_type] = SourceResult(
                        resource_type=scanner.resource_type,
                        error=f"{scanner.resource_type.value} scan in {self.region} {reason}"
                    )
        finally:
            # Do not block on hung or cancelled sources
            executor.shutdown(wait=False, cancel_futures=True)

        order = list(ResourceType)
        sources = sorted(results.values(), key=lambda r: order.index(r.resource_type))
        report = InventoryReport(sources=sources)

        # Partial results need at least one source that answered
        if sources and len(report.failures) == len(sources):
            reasons = '; '.join(f.error for f in report.failures)
            logger.error(
                f"All {len(sources)} sources failed in {self.region}",
                extra={'region': self.region, 'failed_sources': len(sources)}
            )
            raise UpstreamProviderError(f"All sources failed: {reasons}")

        logger.info(
            f"Completed collection: {len(report.resources)} resources, {len(report.failures)} failed sources",
            extra={'total_resources': len(report.resources), 'failed_sources': len(report.failures)}
        )
        return report

    def list_resources(self) -> List[Resource]:
        """
        Return the merged resource list in canonical order.

        Failed sources are skipped in partial mode and raise in fail-fast mode.
        """
        return self.collect().resources
