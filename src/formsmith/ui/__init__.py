"""Designer-side functionality: grid layout engine for voucher forms."""
