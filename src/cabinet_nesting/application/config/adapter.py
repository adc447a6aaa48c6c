"""Convert validated configuration models into domain objects."""

from __future__ import annotations

from cabinet_nesting.application.config.schema import NestingConfiguration
from cabinet_nesting.domain.value_objects import Board, EdgeTape, Panel
from cabinet_nesting.infrastructure.bin_packing import NestingConfig


def config_to_boards(config: NestingConfiguration) -> list[Board]:
    """Board types in configuration order. Missing names fall back to the id."""
    return [
        Board(
            id=board.id,
            name=board.name or board.id,
            width=board.width,
            height=board.height,
            thickness=board.thickness,
            material=board.material,
            cost=board.cost,
            stock=board.stock,
        )
        for board in config.boards
    ]


def config_to_panels(config: NestingConfiguration) -> list[Panel]:
    """Panels in configuration order."""
    return [
        Panel(
            id=panel.id,
            name=panel.name or panel.id,
            width=panel.width,
            height=panel.height,
            component_id=panel.component_id,
            board_id=panel.board_id,
            edge_top=panel.edge_top,
            edge_right=panel.edge_right,
            edge_bottom=panel.edge_bottom,
            edge_left=panel.edge_left,
            quantity=panel.quantity,
        )
        for panel in config.panels
    ]


def config_to_edge_tapes(config: NestingConfiguration) -> list[EdgeTape]:
    return [
        EdgeTape(
            id=tape.id,
            name=tape.name or tape.id,
            width=tape.width,
            material=tape.material,
            cost_per_meter=tape.cost_per_meter,
            reel_length=tape.reel_length,
            stock=tape.stock,
        )
        for tape in config.edge_tapes
    ]


def config_to_nesting_config(config: NestingConfiguration) -> NestingConfig:
    options = config.options
    return NestingConfig(
        allow_rotation=options.allow_rotation,
        expand_quantities=options.expand_quantities,
        stock_policy=options.stock_policy,
    )
