from typing import Any

# -------- Aliases (clarify intent) --------
UnixMillis = int
Principal = str  # caller identity, e.g. "0xabc..."
VenueId = str  # opaque pool id, owned by the host
CostUnits = int  # abstract execution-cost units (>= 0)
FeeUnits = int  # host fee encoding, 0..MAX_FEE
StateRecord = dict[str, Any]
