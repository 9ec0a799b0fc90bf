"""
Theurgy - Command implementations for Donorflow.

Each module corresponds to a top-level CLI command:
- run:             approve, optionally create a campaign, donate
- approve:         (mint and) approve the campaign as token spender
- create_campaign: create a campaign through the factory
- donate:          donate to the configured campaign
"""
