"""nodebridge — protocol-abstraction layer for audio node servers.

WHY: An orchestrator (node pool, players, queues) wants to talk to
interchangeable audio-processing servers without caring which wire dialect
each one speaks. This package hides two incompatible dialects behind one
driver contract and one canonical response schema.

HOW: Four layers — a pure load-type translator (core), a resume-token state
machine (core), a REST requester and a WebSocket connection owned by a
per-dialect driver (drivers, node). Typed wire models live in api.

RULES:
- Every dialect implements the same AbstractDriver contract
- Every REST response is normalized to the canonical load-type taxonomy
- Retries, reconnection and load balancing belong to the caller
"""

__version__ = "0.1.0"

CLIENT_NAME = "nodebridge"
PROJECT_URL = "https://pypi.org/project/nodebridge/"
