"""
mutators/
---------
Structure Mutators: live structures whose operations play back through
the same Player as recorded traces.  Public API:

    from mutators import MUTATORS, ArrayMutator, …
"""

from typing import Dict, Type

from mutators.array       import ArrayMutator
from mutators.base        import StructureMutator
from mutators.linked_list import LinkedListMutator
from mutators.queue       import QueueMutator
from mutators.stack       import StackMutator
from mutators.tree        import TreeMutator

MUTATORS: Dict[str, Type[StructureMutator]] = {
    cls.name: cls
    for cls in (ArrayMutator, LinkedListMutator, StackMutator, QueueMutator, TreeMutator)
}

__all__ = [
    "MUTATORS",
    "StructureMutator",
    "ArrayMutator",
    "LinkedListMutator",
    "StackMutator",
    "QueueMutator",
    "TreeMutator",
]
