"""Tests for PDA derivation and bonding-curve decoding."""

from __future__ import annotations

import struct

import pytest
from solders.pubkey import Pubkey

from conftest import bonding_curve_bytes
from pump_liquidator.constants import (
    BONDING_CURVE_SEED,
    CREATOR_VAULT_SEED,
    PUMP_EVENT_AUTHORITY,
    PUMP_GLOBAL,
    PUMP_PROGRAM,
    TOKEN_PROGRAM,
)
from pump_liquidator.data_sources.solana_rpc import AccountInfo, RpcError
from pump_liquidator.pda import (
    BONDING_CURVE_MIN_SIZE,
    CREATOR_OFFSET,
    BondingCurveLayoutError,
    BondingCurveNotFoundError,
    derive_associated_bonding_curve,
    derive_associated_token_address,
    derive_bonding_curve,
    derive_creator_vault,
    derive_sell_addresses,
    parse_bonding_curve,
)

# Mainnet accounts of the Pump program and the associated-token program
MAINNET_GLOBAL = Pubkey.from_string("4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf")
MAINNET_EVENT_AUTHORITY = Pubkey.from_string("Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1")
MAINNET_ATA_PROGRAM = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")


class TestDerivation:

    def test_program_id_reproduces_mainnet_pdas(self):
        assert Pubkey.find_program_address([b"global"], PUMP_PROGRAM)[0] == MAINNET_GLOBAL
        assert Pubkey.find_program_address([b"__event_authority"], PUMP_PROGRAM)[0] == MAINNET_EVENT_AUTHORITY
        assert PUMP_GLOBAL == MAINNET_GLOBAL
        assert PUMP_EVENT_AUTHORITY == MAINNET_EVENT_AUTHORITY

    def test_bonding_curve_is_deterministic(self, mint):
        assert derive_bonding_curve(mint) == derive_bonding_curve(mint)

    def test_bonding_curve_depends_on_mint(self, mint):
        assert derive_bonding_curve(mint) != derive_bonding_curve(Pubkey.new_unique())

    def test_bonding_curve_seeds(self, mint):
        expected, _ = Pubkey.find_program_address([b"bonding-curve", bytes(mint)], PUMP_PROGRAM)
        assert BONDING_CURVE_SEED == b"bonding-curve"
        assert derive_bonding_curve(mint) == expected

    def test_bonding_curve_is_off_curve(self, mint):
        assert not derive_bonding_curve(mint).is_on_curve()

    def test_creator_vault_seeds(self, creator):
        expected, _ = Pubkey.find_program_address([b"creator-vault", bytes(creator)], PUMP_PROGRAM)
        assert CREATOR_VAULT_SEED == b"creator-vault"
        assert derive_creator_vault(creator) == expected

    def test_associated_token_address(self, keypair, mint):
        owner = keypair.pubkey()
        expected, _ = Pubkey.find_program_address(
            [bytes(owner), bytes(TOKEN_PROGRAM), bytes(mint)], MAINNET_ATA_PROGRAM
        )
        assert derive_associated_token_address(owner, mint) == expected

    def test_associated_bonding_curve_is_curve_ata(self, mint):
        curve = derive_bonding_curve(mint)
        assert derive_associated_bonding_curve(curve, mint) == derive_associated_token_address(curve, mint)


class TestParseBondingCurve:

    def test_layout_size(self):
        assert BONDING_CURVE_MIN_SIZE == 81
        assert CREATOR_OFFSET + 32 == BONDING_CURVE_MIN_SIZE

    def test_decodes_fields(self, creator):
        state = parse_bonding_curve(bonding_curve_bytes(creator))
        assert state.creator == str(creator)
        assert state.complete is False
        assert state.virtual_sol_reserves == 30_000_000_000
        assert state.token_total_supply == 10**15

    def test_creator_read_from_fixed_offset(self, creator):
        data = bonding_curve_bytes(creator, complete=True)
        assert data[CREATOR_OFFSET:CREATOR_OFFSET + 32] == bytes(creator)
        state = parse_bonding_curve(data)
        assert state.complete is True
        assert Pubkey.from_string(state.creator) == creator

    def test_exact_minimum_size(self, creator):
        data = bonding_curve_bytes(creator, trailing=0)
        assert parse_bonding_curve(data).creator == str(creator)

    def test_short_data_raises(self):
        data = bytes(8) + struct.pack("<QQ", 1, 2)
        with pytest.raises(BondingCurveLayoutError):
            parse_bonding_curve(data)


class TestDeriveSellAddresses:

    @pytest.mark.asyncio
    async def test_returns_four_addresses(self, ctx, rpc, mint, creator, pump_curve_account):
        rpc.get_account_info.return_value = pump_curve_account

        addresses = await derive_sell_addresses(ctx, mint)

        curve = derive_bonding_curve(mint)
        rpc.get_account_info.assert_awaited_once_with(str(curve))
        assert addresses.bonding_curve == str(curve)
        assert addresses.associated_bonding_curve == str(derive_associated_bonding_curve(curve, mint))
        assert addresses.user_ata == str(derive_associated_token_address(ctx.owner, mint))
        assert addresses.creator_vault == str(derive_creator_vault(creator))
        assert addresses.creator == str(creator)
        assert len({
            addresses.bonding_curve,
            addresses.associated_bonding_curve,
            addresses.user_ata,
            addresses.creator_vault,
        }) == 4

    @pytest.mark.asyncio
    async def test_missing_curve_raises(self, ctx, rpc, mint):
        rpc.get_account_info.return_value = None
        with pytest.raises(BondingCurveNotFoundError) as exc_info:
            await derive_sell_addresses(ctx, mint)
        assert exc_info.value.mint == str(mint)

    @pytest.mark.asyncio
    async def test_rpc_error_propagates(self, ctx, rpc, mint):
        rpc.get_account_info.side_effect = RpcError("getAccountInfo", "timeout")
        with pytest.raises(RpcError):
            await derive_sell_addresses(ctx, mint)

    @pytest.mark.asyncio
    async def test_truncated_account_raises(self, ctx, rpc, mint):
        rpc.get_account_info.return_value = AccountInfo(owner=PUMP_PROGRAM, lamports=1, data=bytes(40))
        with pytest.raises(BondingCurveLayoutError):
            await derive_sell_addresses(ctx, mint)
