"""
Pneuma - On-chain interaction layer for Donorflow.

Provides JSON-RPC client, ABI management, and transaction utilities
for interacting with the deposit token, campaign factory and campaign
contracts.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
