"""AgriSwarm: rule-based agricultural advisory agents."""
