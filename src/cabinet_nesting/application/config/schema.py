"""Pydantic models for nesting job configuration files.

A configuration file describes the boards in stock, the panels to cut,
optional edge tapes and the options for the run. Dimensions are in mm.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cabinet_nesting.infrastructure.bin_packing import StockPolicy

# Supported schema versions for configuration files
# Version 1.0: Boards, panels, edge tapes and run options
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class NestingOptionsSchema(BaseModel):
    """Options controlling the nesting run.

    Attributes:
        allow_rotation: Whether panels may be turned 90 degrees.
        expand_quantities: Whether panel quantities are expanded into pieces.
        stock_policy: "pool" to honor board stock, "single" for one sheet
            per board.
    """

    model_config = ConfigDict(extra="forbid")

    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    expand_quantities: bool = Field(
        default=True, description="Expand panel quantities into individual pieces"
    )
    stock_policy: StockPolicy = Field(
        default=StockPolicy.POOL, description="How board stock limits opened sheets"
    )


class BoardConfig(BaseModel):
    """A board type in stock."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    width: float = Field(..., gt=0, le=10000.0, description="Width in mm")
    height: float = Field(..., gt=0, le=10000.0, description="Height in mm")
    thickness: float = Field(default=18.0, gt=0, le=200.0, description="Thickness in mm")
    material: str = Field(default="")
    cost: float = Field(default=0.0, ge=0)
    stock: int = Field(default=1, ge=0)


class PanelConfig(BaseModel):
    """A panel to cut."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    width: float = Field(..., gt=0, description="Width in mm")
    height: float = Field(..., gt=0, description="Height in mm")
    component_id: str | None = None
    board_id: str | None = None
    edge_top: bool = False
    edge_right: bool = False
    edge_bottom: bool = False
    edge_left: bool = False
    quantity: int = Field(default=1, ge=1, le=10000)


class EdgeTapeConfig(BaseModel):
    """An edge tape in stock."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    width: float = Field(..., gt=0, description="Tape width in mm")
    material: str = Field(default="")
    cost_per_meter: float = Field(default=0.0, ge=0)
    reel_length: float = Field(default=0.0, ge=0, description="Reel length in meters")
    stock: int = Field(default=0, ge=0)


class NestingConfiguration(BaseModel):
    """Root configuration for a nesting job.

    Attributes:
        schema_version: Configuration schema version.
        job_name: Optional name for the job.
        order_id: Optional order the job belongs to.
        options: Run options.
        boards: Board types in stock (at least one).
        panels: Panels to cut (at least one).
        edge_tapes: Edge tapes available for costing.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0")
    job_name: str | None = None
    order_id: str | None = None
    options: NestingOptionsSchema = Field(default_factory=NestingOptionsSchema)
    boards: list[BoardConfig] = Field(..., min_length=1)
    panels: list[PanelConfig] = Field(..., min_length=1)
    edge_tapes: list[EdgeTapeConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        """Reject unknown schema versions."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported: {supported}"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> NestingConfiguration:
        """Board and panel ids must be unique within their lists."""
        for label, items in (("board", self.boards), ("panel", self.panels)):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    raise ValueError(f"Duplicate {label} id '{item.id}'")
                seen.add(item.id)
        return self
