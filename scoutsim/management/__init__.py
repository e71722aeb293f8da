"""World management: transfers, inbox, reputation, standings, awards, retirements and the weekly tick."""
