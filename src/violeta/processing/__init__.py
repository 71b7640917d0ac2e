"""Processing pipeline - leaves first.

Submodules:
- tickers: ticker extraction and validation
- mentions: mention counts and sector tallies across a news corpus
- sentiment: keyword sentiment scoring
- catalysts: corporate-event classification
- conviction: conviction scoring and thresholds
- trade_plan: WATCH / TRADE plan generation
- scanner: orchestration of one scan
"""
