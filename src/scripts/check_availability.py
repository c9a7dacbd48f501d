from mrp_core.inventory.fefo_allocator import FEFOAllocator, allocation_frame
from mrp_core.planning.buildable import BuildableEstimator
from mrp_core.planning.requirements import RequirementDeriver
from repositories.factory import get_inventory_repository, get_master_data_repository

master = get_master_data_repository()
inventory = get_inventory_repository()

bom = master.get_bom("ITM-006")
lots = inventory.list_lots()

requirements = RequirementDeriver().derive(bom, 20)

print("REQUIREMENTS:")
for req in requirements:
    print(f"  {req.item_id}: {req.required_qty}")

results = FEFOAllocator().allocate(requirements, lots)

print("\nFEFO ALLOCATION:")
print(allocation_frame(results))

buildable = BuildableEstimator().estimate(bom, lots)

print("\nBUILDABLE NOW:")
print(buildable.max_units, "limit:", ", ".join(buildable.limiting_item_ids))
