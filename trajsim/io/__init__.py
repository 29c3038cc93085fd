"""
Manifest I/O for simulation runs.
"""

from trajsim.io.manifest import load_manifest, parse_manifest, resolve_manifest_path

__all__ = ['load_manifest', 'parse_manifest', 'resolve_manifest_path']
