"""HTTP adapter over the explorer engine."""
