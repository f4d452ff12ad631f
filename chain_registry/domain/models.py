from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from chain_registry.domain.registry_utils import pair_key, path_name


class RegistryModel(BaseModel):
    """
    Base for every registry document model.

    Registry JSON is not schema-enforced upstream, so unknown fields are
    ignored and every field carries a default.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# chain.json
# ---------------------------------------------------------------------------


class Genesis(RegistryModel):
    genesis_url: str = ""


class Binaries(RegistryModel):
    linux_amd_64: str = Field(default="", alias="linux/amd64")
    linux_arm_64: str = Field(default="", alias="linux/arm64")
    darwin_amd_64: str = Field(default="", alias="darwin/amd64")
    darwin_arm_64: str = Field(default="", alias="darwin/arm64")
    windows_amd_64: str = Field(default="", alias="windows/amd64")


class Codebase(RegistryModel):
    git_repo: str = ""
    recommended_version: str = ""
    compatible_versions: List[str] = Field(default_factory=list)
    binaries: Binaries = Field(default_factory=Binaries)
    cosmos_sdk_version: str = ""
    tendermint_version: str = ""
    cosmwasm_version: str = ""
    cosmwasm_enabled: bool = False


class Peer(RegistryModel):
    id: str = ""
    address: str = ""
    provider: Optional[str] = None


class Peers(RegistryModel):
    seeds: List[Peer] = Field(default_factory=list)
    persistent_peers: List[Peer] = Field(default_factory=list)


class Endpoint(RegistryModel):
    """A single RPC, REST or gRPC endpoint."""

    address: str = ""
    provider: Optional[str] = None


class Apis(RegistryModel):
    rpc: List[Endpoint] = Field(default_factory=list)
    rest: List[Endpoint] = Field(default_factory=list)
    grpc: List[Endpoint] = Field(default_factory=list)


class FeeToken(RegistryModel):
    denom: str = ""
    fixed_min_gas_price: float = 0.0
    low_gas_price: float = 0.0
    average_gas_price: float = 0.0
    high_gas_price: float = 0.0


class Fees(RegistryModel):
    fee_tokens: List[FeeToken] = Field(default_factory=list)


class StakingToken(RegistryModel):
    denom: str = ""


class Staking(RegistryModel):
    staking_tokens: List[StakingToken] = Field(default_factory=list)


class Explorer(RegistryModel):
    kind: str = ""
    url: str = ""
    tx_page: str = ""
    account_page: str = ""


class ChainInfo(RegistryModel):
    """
    Per-chain configuration record.
    Read from: <REGISTRY_ROOT>/<chain_name>/chain.json
    """

    schema_url: str = Field(default="", alias="$schema")
    chain_name: str = ""
    status: str = ""
    network_type: str = ""
    pretty_name: str = ""
    chain_id: str = ""
    bech32_prefix: str = ""
    daemon_name: str = ""
    node_home: str = ""
    slip44: int = 0
    genesis: Genesis = Field(default_factory=Genesis)
    codebase: Codebase = Field(default_factory=Codebase)
    peers: Peers = Field(default_factory=Peers)
    apis: Apis = Field(default_factory=Apis)
    fees: Fees = Field(default_factory=Fees)
    staking: Staking = Field(default_factory=Staking)
    website: str = ""
    update_link: str = ""
    key_algos: List[str] = Field(default_factory=list)
    explorers: List[Explorer] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# assetlist.json
# ---------------------------------------------------------------------------


class DenomUnit(RegistryModel):
    denom: str = ""
    exponent: int = 0
    aliases: List[str] = Field(default_factory=list)


class LogoURIs(RegistryModel):
    png: Optional[str] = None
    svg: Optional[str] = None


class Asset(RegistryModel):
    description: str = ""
    denom_units: List[DenomUnit] = Field(default_factory=list)
    type_asset: str = ""
    base: str = ""
    name: str = ""
    display: str = ""
    symbol: str = ""
    logo_uris: LogoURIs = Field(default_factory=LogoURIs, alias="logo_URIs")
    coingecko_id: str = ""


class AssetList(RegistryModel):
    """
    Tradable assets of one chain.
    Read from: <REGISTRY_ROOT>/<chain_name>/assetlist.json
    """

    schema_url: str = Field(default="", alias="$schema")
    chain_name: str = ""
    assets: List[Asset] = Field(default_factory=list)

    def get_asset(self, denom: str) -> Optional[Asset]:
        """Find an asset by its base denom or display symbol."""
        for asset in self.assets:
            if asset.base == denom or asset.symbol == denom:
                return asset
        return None


# ---------------------------------------------------------------------------
# _IBC/<chain_a>-<chain_b>.json
# ---------------------------------------------------------------------------


class PathModel(RegistryModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class PathChain(PathModel):
    """One side of a path: the chain plus its light client and connection."""

    chain_name: str = ""
    client_id: str = ""
    connection_id: str = ""


class ChannelEnd(PathModel):
    channel_id: str = ""
    port_id: str = ""


class ChannelTags(PathModel):
    dex: str = ""
    preferred: bool = False
    properties: str = ""
    status: str = ""


class Channel(PathModel):
    """One logical bridge between the two chains of a path."""

    chain_1: ChannelEnd = Field(default_factory=ChannelEnd)
    chain_2: ChannelEnd = Field(default_factory=ChannelEnd)
    ordering: str = ""
    version: str = ""
    tags: ChannelTags = Field(default_factory=ChannelTags)


class PathRecord(PathModel):
    """
    Bridging relationship between exactly two chains.

    The (chain_1, chain_2) pair is semantically unordered. Instances are
    frozen; a reload replaces records instead of updating them.
    """

    schema_url: str = Field(default="", alias="$schema")
    chain_1: PathChain = Field(default_factory=PathChain)
    chain_2: PathChain = Field(default_factory=PathChain)
    channels: Tuple[Channel, ...] = Field(default_factory=tuple)

    # Document the record was read from, e.g. "_IBC/cosmoshub-osmosis.json".
    # Set by the loader for diagnostics and excluded from serialization.
    source: Optional[str] = Field(
        default=None,
        exclude=True,
        description="Identifier of the source document for this record.",
    )

    @property
    def chain_names(self) -> Tuple[str, str]:
        return (self.chain_1.chain_name, self.chain_2.chain_name)

    @property
    def pair_key(self) -> Tuple[str, str]:
        return pair_key(self.chain_1.chain_name, self.chain_2.chain_name)

    @property
    def name(self) -> str:
        """Canonical registry name of this path, e.g. ``cosmoshub-osmosis``."""
        return path_name(self.chain_1.chain_name, self.chain_2.chain_name)

    @property
    def statuses(self) -> List[str]:
        return [channel.tags.status for channel in self.channels]

    def involves(self, chain_name: str) -> bool:
        return chain_name in self.chain_names

    def counterparty(self, chain_name: str) -> Optional[str]:
        """Return the chain on the other side of the path from ``chain_name``."""
        if chain_name == self.chain_1.chain_name:
            return self.chain_2.chain_name
        if chain_name == self.chain_2.chain_name:
            return self.chain_1.chain_name
        return None

    def describe(self) -> str:
        return self.source or self.name


# ---------------------------------------------------------------------------
# Repository-level configuration
# ---------------------------------------------------------------------------


class DuplicatePolicy(str, Enum):
    """How the path cache treats two records for the same chain pair."""

    ERROR = "error"
    FIRST_WINS = "first_wins"
    LAST_WINS = "last_wins"


class RegistryConfig(BaseModel):
    """
    Settings for loading and serving the registry.
    Read from the JSON file named by CHAIN_REGISTRY_CONFIG, if set.
    """

    source_identifier: str = Field(
        default="cosmos-chain-registry",
        description="Identifier reported by /information.",
    )
    display_name: str = Field(
        default="Cosmos chain registry cache",
        description="Human-friendly name for this registry instance.",
    )
    refresh_interval_seconds: int = Field(
        default=3600,
        ge=60,
        description="How often the in-memory snapshot is rebuilt from disk.",
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.ERROR,
        description="Handling of two path documents naming the same chain pair.",
    )
