"""GraphQL documents sent to the Aavegotchi core subgraph."""

from __future__ import annotations

from typing import Final

ITEM_OWNERS: Final[str] = """
query ItemOwners($id: ID!, $first: Int!, $skip: Int!) {
  itemType(id: $id) {
    id
    owners(first: $first, skip: $skip) {
      owner
      balance
    }
  }
}
"""

# Cursor pagination on id avoids graph-node's skip ceiling.
EQUIPPED_HOLDERS: Final[str] = """
query EquippedHolders($equipped: [Int!]!, $lastId: ID!, $first: Int!) {
  aavegotchis(
    first: $first
    orderBy: id
    orderDirection: asc
    where: { equippedWearables_contains: $equipped, id_gt: $lastId }
  ) {
    id
  }
}
"""
