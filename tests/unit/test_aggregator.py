"""Unit tests for the concurrent aggregator."""
import threading
import time
import pytest
from typing import Any, Dict, List
from unittest.mock import patch

from waste_manager.aggregator import Aggregator
from waste_manager.config import WasteManagerConfig
from waste_manager.scanners import (
    BaseScanner,
    ComputeScanner,
    ManagedDbScanner,
    SnapshotScanner,
    VolumeScanner,
)
from waste_manager.types import (
    ComputeDetails,
    ManagedDbDetails,
    Resource,
    ResourceType,
    SnapshotDetails,
    VolumeDetails,
)
from waste_manager.utils import UpstreamProviderError

DETAILS = {
    ResourceType.COMPUTE: ComputeDetails(),
    ResourceType.MANAGED_DB: ManagedDbDetails(),
    ResourceType.VOLUME: VolumeDetails(),
    ResourceType.SNAPSHOT: SnapshotDetails(),
}


class FakeSource(BaseScanner):
    """Scanner returning canned ids after an optional delay or gate."""

    def __init__(self, config, resource_type, ids=(), delay=0.0, error=None, gate=None):
        super().__init__(config.region, config)
        self._type = resource_type
        self.ids = list(ids)
        self.delay = delay
        self.error = error
        self.gate = gate

    @property
    def resource_type(self) -> ResourceType:
        return self._type

    def create_client(self):
        return None

    def fetch_records(self, client) -> List[Dict[str, Any]]:
        if self.gate is not None:
            self.gate.wait(5)
        time.sleep(self.delay)
        if self.error:
            raise self.error
        return [{'id': i} for i in self.ids]

    def to_resource(self, record: Dict[str, Any]) -> Resource:
        return self.build_resource(record['id'], None, 'stopped', None, DETAILS[self._type])


def make_sources(config, **overrides):
    ids = {
        ResourceType.COMPUTE: ['i-1', 'i-2'],
        ResourceType.MANAGED_DB: ['db-1'],
        ResourceType.VOLUME: ['vol-1'],
        ResourceType.SNAPSHOT: ['snap-1'],
    }
    sources = []
    for resource_type in ResourceType:
        kwargs = {'ids': ids[resource_type]}
        kwargs.update(overrides.get(resource_type.name, {}))
        sources.append(FakeSource(config, resource_type, **kwargs))
    return sources


class TestAggregatorConstruction:
    def test_default_scanners_use_configured_region(self):
        config = WasteManagerConfig(region='eu-central-1')
        aggregator = Aggregator(config)

        assert [type(s) for s in aggregator.scanners] == [
            ComputeScanner, ManagedDbScanner, VolumeScanner, SnapshotScanner
        ]
        assert all(s.region == 'eu-central-1' for s in aggregator.scanners)
        assert aggregator.region == 'eu-central-1'


class TestListResources:
    def test_canonical_order(self, test_config):
        # Compute finishes last but still comes first
        sources = make_sources(test_config, COMPUTE={'delay': 0.2})
        aggregator = Aggregator(test_config, scanners=reversed(sources))

        ids = [r.id for r in aggregator.list_resources()]

        assert ids == ['i-1', 'i-2', 'db-1', 'vol-1', 'snap-1']

    def test_all_empty(self, test_config):
        sources = [FakeSource(test_config, t) for t in ResourceType]
        report = Aggregator(test_config, scanners=sources).collect()

        assert report.resources == []
        assert [s.resource_type for s in report.sources] == list(ResourceType)

    def test_types_follow_order(self, test_config):
        resources = Aggregator(test_config, scanners=make_sources(test_config)).list_resources()
        order = list(ResourceType)
        positions = [order.index(r.type) for r in resources]

        assert positions == sorted(positions)

    def test_runs_concurrently(self, test_config):
        sources = make_sources(
            test_config,
            COMPUTE={'delay': 0.3},
            MANAGED_DB={'delay': 0.3},
            VOLUME={'delay': 0.3},
            SNAPSHOT={'delay': 0.3},
        )
        start = time.time()
        Aggregator(test_config, scanners=sources).collect()

        assert time.time() - start < 1.0


class TestPartialResults:
    def test_failed_source_isolated(self, test_config):
        sources = make_sources(test_config, MANAGED_DB={'error': UpstreamProviderError('Access denied for RDS')})
        report = Aggregator(test_config, scanners=sources).collect()

        assert [r.id for r in report.resources] == ['i-1', 'i-2', 'vol-1', 'snap-1']
        assert len(report.failures) == 1
        assert report.failures[0].resource_type is ResourceType.MANAGED_DB
        assert 'Access denied' in report.failures[0].error

    def test_every_source_failing_raises(self, test_config):
        denied = {'error': UpstreamProviderError('Access denied')}
        sources = make_sources(test_config, COMPUTE=denied, MANAGED_DB=denied, VOLUME=denied, SNAPSHOT=denied)

        with pytest.raises(UpstreamProviderError) as exc_info:
            Aggregator(test_config, scanners=sources).collect()

        assert 'All sources failed' in str(exc_info.value)
        assert 'Access denied' in str(exc_info.value)

    def test_three_failures_still_partial(self, test_config):
        denied = {'error': UpstreamProviderError('Access denied')}
        sources = make_sources(test_config, COMPUTE=denied, MANAGED_DB=denied, VOLUME=denied)

        report = Aggregator(test_config, scanners=sources).collect()

        assert [r.id for r in report.resources] == ['snap-1']
        assert len(report.failures) == 3

    def test_timeout_marks_pending_source(self, test_config):
        test_config.provider_timeout = 0.3
        gate = threading.Event()
        sources = make_sources(test_config, VOLUME={'gate': gate})
        try:
            report = Aggregator(test_config, scanners=sources).collect()
        finally:
            gate.set()

        assert [f.resource_type for f in report.failures] == [ResourceType.VOLUME]
        assert 'timed out' in report.failures[0].error
        assert [r.id for r in report.resources] == ['i-1', 'i-2', 'db-1', 'snap-1']


class TestFailFast:
    @pytest.fixture
    def strict_config(self, test_config):
        test_config.partial_results = False
        return test_config

    @pytest.mark.parametrize('failing', ['COMPUTE', 'MANAGED_DB', 'VOLUME', 'SNAPSHOT'])
    def test_any_failure_yields_no_resources(self, strict_config, failing):
        sources = make_sources(strict_config, **{failing: {'error': RuntimeError('throttled')}})
        aggregator = Aggregator(strict_config, scanners=sources)

        with pytest.raises(UpstreamProviderError) as exc_info:
            aggregator.list_resources()

        assert 'throttled' in str(exc_info.value)

    def test_timeout_raises(self, strict_config):
        strict_config.provider_timeout = 0.3
        gate = threading.Event()
        sources = make_sources(strict_config, SNAPSHOT={'gate': gate})
        try:
            with pytest.raises(UpstreamProviderError) as exc_info:
                Aggregator(strict_config, scanners=sources).collect()
        finally:
            gate.set()

        assert 'SNAPSHOT' in str(exc_info.value)
        assert 'timed out' in str(exc_info.value)

    def test_failure_logged(self, strict_config):
        sources = make_sources(strict_config, VOLUME={'error': RuntimeError('denied')})

        with patch('waste_manager.aggregator.logger') as mock_logger:
            with pytest.raises(UpstreamProviderError):
                Aggregator(strict_config, scanners=sources).collect()

        mock_logger.error.assert_called()
