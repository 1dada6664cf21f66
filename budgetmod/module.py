"""Application module wiring of the budget module."""

from __future__ import annotations

import json

from budgetmod.genesis import GenesisState, default_genesis_state, validate_genesis
from budgetmod.keeper import Context, Keeper
from budgetmod.keys import MODULE_NAME


def begin_blocker(ctx: Context, keeper: Keeper) -> None:
    """Collect budgets at the start of a block."""
    keeper.collect_budgets(ctx)


class AppModule:
    """Genesis handling and block hooks for the budget module."""

    name = MODULE_NAME
    consensus_version = 1

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def default_genesis(self) -> bytes:
        return json.dumps(default_genesis_state().to_dict()).encode()

    @staticmethod
    def _parse(raw: bytes | str) -> GenesisState:
        try:
            return GenesisState.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc

    def validate_genesis(self, raw: bytes | str) -> None:
        validate_genesis(self._parse(raw))

    def init_genesis(self, ctx: Context, raw: bytes | str) -> list:
        self.keeper.init_genesis(ctx, self._parse(raw))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return json.dumps(self.keeper.export_genesis(ctx).to_dict()).encode()

    def begin_block(self, ctx: Context) -> None:
        begin_blocker(ctx, self.keeper)

    def end_block(self, ctx: Context) -> list:
        return []