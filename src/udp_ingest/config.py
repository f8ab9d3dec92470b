from datetime import timedelta
from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    field_serializer,
    field_validator,
)

from .duration import format_duration, parse_duration

# Default database for UDP traffic.
DEFAULT_DATABASE = "udp"

# Points per write batch.
DEFAULT_BATCH_SIZE = 5000

# Number of batches allowed to queue up waiting for a flush.
DEFAULT_BATCH_PENDING = 10

# Max time a partial batch waits before it is flushed anyway.
DEFAULT_BATCH_TIMEOUT = timedelta(seconds=1)

# Timestamp precision assumed for incoming points.
DEFAULT_PRECISION = "n"

# Size of the OS receive buffer for the UDP socket. 0 keeps the OS default,
# which is usually too small for high UDP throughput. The OS must allow the
# requested size or the listener fails to start:
#     Linux:      sudo sysctl -w net.core.rmem_max=<read-buffer>
#     BSD/Darwin: sudo sysctl -w kern.ipc.maxsockbuf=<read-buffer>
DEFAULT_READ_BUFFER = 0

# Largest datagram the listener reads, the protocol max of 65536.
# Tune this down to the udp_payload of your metrics source (e.g. telegraf);
# payloads larger than this are truncated.
DEFAULT_UDP_PAYLOAD_SIZE = 65536

# Recognised timestamp precisions. Informational only, never enforced here.
PRECISIONS = ("n", "u", "ms", "s", "m", "h")


class UDPConfig(BaseModel):
    """
    Settings for a single UDP listener, keyed the way they appear in the
    ``[[udp]]`` section of the config file.

    Zero values (``""``, ``0``, zero duration) mean "not set" and are
    replaced by :meth:`with_defaults`. ``enabled`` and ``bind_address``
    have no defaults.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: StrictBool = Field(default=False, description="Whether the listener is active")
    bind_address: str = Field(default="", alias="bind-address", description="Local address:port to listen on")

    database: str = Field(default="", description="Target database for ingested points")
    retention_policy: str = Field(
        default="",
        alias="retention-policy",
        description="Target retention policy, empty means the database default",
    )
    batch_size: StrictInt = Field(default=0, alias="batch-size", description="Points per write batch")
    batch_pending: StrictInt = Field(default=0, alias="batch-pending", description="Max batches awaiting flush")
    read_buffer: StrictInt = Field(default=0, alias="read-buffer", description="OS socket receive buffer in bytes")
    batch_timeout: timedelta = Field(
        default=timedelta(0),
        alias="batch-timeout",
        description="Max time a batch waits before a forced flush",
    )
    precision: str = Field(default="", description="Timestamp precision of incoming points")
    udp_payload_size: StrictInt = Field(default=0, alias="udp-payload-size", description="Max inbound datagram size in bytes")

    @field_validator("batch_timeout", mode="before")
    @classmethod
    def _parse_batch_timeout(cls, value: Any) -> Any:
        # Durations come from the file as Go-style strings ("1s", "500ms").
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_serializer("batch_timeout")
    def _serialize_batch_timeout(self, value: timedelta) -> str:
        return format_duration(value)

    def with_defaults(self) -> "UDPConfig":
        """
        Return a new config with every unset tunable replaced by its default.
        The receiver is left untouched.
        """
        updates: Dict[str, Any] = {}
        if self.database == "":
            updates["database"] = DEFAULT_DATABASE
        if self.batch_size == 0:
            updates["batch_size"] = DEFAULT_BATCH_SIZE
        if self.batch_pending == 0:
            updates["batch_pending"] = DEFAULT_BATCH_PENDING
        if self.batch_timeout == timedelta(0):
            updates["batch_timeout"] = DEFAULT_BATCH_TIMEOUT
        if self.precision == "":
            updates["precision"] = DEFAULT_PRECISION
        if self.read_buffer == 0:
            updates["read_buffer"] = DEFAULT_READ_BUFFER
        if self.udp_payload_size == 0:
            updates["udp_payload_size"] = DEFAULT_UDP_PAYLOAD_SIZE
        return self.model_copy(update=updates)

    def to_toml_dict(self) -> Dict[str, Any]:
        """Plain mapping keyed by the config file keys."""
        return self.model_dump(by_alias=True)

    def diagnostics(self) -> Dict[str, Any]:
        return self.to_toml_dict()


def resolve(config: UDPConfig) -> UDPConfig:
    """Fully resolved copy of ``config``. Never raises."""
    return config.with_defaults()
