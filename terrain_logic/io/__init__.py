from .sinks import MemoryTerrainSink, PngTerrainSink

__all__ = ["MemoryTerrainSink", "PngTerrainSink"]
