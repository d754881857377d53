"""
pico-deploy - Bootstrap orchestrator for the Pico proving service.

Brings a host from nothing to a running proving engine + gnark sidecar:
- Host prerequisite checks and compose command selection
- Environment file bootstrap from template
- GPU runtime probe (GPU variant)
- gnark verification-key asset download
- Image, data directory and compose launch gates
"""

__version__ = "0.1.0"
