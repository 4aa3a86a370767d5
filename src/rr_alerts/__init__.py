"""Risk/reward zone tracking and cooldown-gated email alerts."""
