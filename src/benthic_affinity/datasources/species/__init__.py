"""Species reference tables: the species list and the trait reference.

Public API:
  - species_list: load_species_list
  - traits: load_traits
"""

from benthic_affinity.datasources.species.species_list import load_species_list
from benthic_affinity.datasources.species.traits import load_traits

__all__ = ["load_species_list", "load_traits"]
