from neurahub.offline.bridge import TeamHubBridge, FlushResult
from neurahub.offline.gateway import SupabaseGateway
from neurahub.offline.outbox import Outbox, OutboxOperation
from neurahub.offline.snapshot import LocalSnapshotStore

__all__ = [
    "TeamHubBridge",
    "FlushResult",
    "SupabaseGateway",
    "Outbox",
    "OutboxOperation",
    "LocalSnapshotStore",
]
