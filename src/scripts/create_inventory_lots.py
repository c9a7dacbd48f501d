import pandas as pd
from deltalake import write_deltalake

from mrp_core.config import LOTS_PATH
from repositories.mock_repo import MOCK_LOTS

LOTS_PATH.mkdir(parents=True, exist_ok=True)

# -------------------------------------------------
# Mock lot-level inventory data
# One row = item-lot
# -------------------------------------------------
lots_df = pd.DataFrame(MOCK_LOTS)
lots_df["expiry_date"] = pd.to_datetime(lots_df["expiry_date"]).dt.date
lots_df["qty_on_hand"] = lots_df["qty_on_hand"].astype(float)

# -------------------------------------------------
# Write Delta table
# -------------------------------------------------
write_deltalake(
    LOTS_PATH.as_posix(),
    lots_df,
    mode="overwrite"
)

print("✅ Inventory lots Delta table created at:")
print(LOTS_PATH)
