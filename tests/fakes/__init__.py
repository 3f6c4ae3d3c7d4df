from tests.fakes.fake_exporter import FakeExporter

__all__ = ["FakeExporter"]
