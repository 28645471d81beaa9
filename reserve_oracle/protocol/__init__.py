"""Fixed-point arithmetic, rate model and interest accrual."""
