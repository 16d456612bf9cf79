"""Core components: adapter interface, records, collector and traverser."""

from .adapter import SizeAdapter
from .record import DirectoryRecord
from .collector import RecordCollector
from .traverser import DirectorySizeTraverser, ScanResult, ProgressCallback

__all__ = [
    'SizeAdapter',
    'DirectoryRecord',
    'RecordCollector',
    'DirectorySizeTraverser',
    'ScanResult',
    'ProgressCallback',
]
