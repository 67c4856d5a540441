"""
Core package aggregator for dexviz contracts (grammar, schemas, tables, errors).

## Contracts (single source of truth)
- Grammar — StatKey / CreatureType enums, SelectionPolicy, normalization helpers.
- Schemas — frozen pydantic models for rows, selection snapshots, derived chart data.
- Tables — canonical column descriptor and CSV header aliases.
- Errors — InvalidSelection, EmptyDataset, RecordNotFound.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- StatKey values double as the lower_snake column names of the loaded frame.

## Examples
```python
from dexviz.core.grammar import parse_policy, stat_key_from_value
stat_key_from_value("Sp. Def").value  # 'sp_def'
parse_policy("0.1").subset_size(25)  # 3
```
"""
