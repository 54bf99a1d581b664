"""
Tests for module imports in monitools.

These tests catch broken import paths, missing exports in __init__.py and
circular imports before they cause runtime failures.
"""


class TestCoreImports:

    def test_import_main(self):
        from monitools.main import main
        assert callable(main)

    def test_version(self):
        import monitools
        assert monitools.__version__ == monitools.VERSION

    def test_import_interfaces(self):
        from monitools.interfaces import CollectionOutcome, CollectorInterface, ProbeInterface
        assert CollectionOutcome is not None
        assert CollectorInterface is not None
        assert ProbeInterface is not None

    def test_import_probes(self):
        import monitools.probes as probes
        for name in probes.__all__:
            assert hasattr(probes, name)

    def test_orchestrator_and_collector(self):
        from monitools.collector import Collector
        from monitools.orchestrator import Orchestrator
        from monitools.interfaces import CollectorInterface
        assert issubclass(Collector, CollectorInterface)
        assert callable(Orchestrator)
