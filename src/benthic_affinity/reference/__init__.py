"""Static habitat schema constants.

Reference data that doesn't change between runs: the closed set of
continuous and categorical habitat attributes, their column families,
and the trait fields merged from the trait reference.

Adding a new attribute:
1. Add an ``AttributeSpec`` to ``reference/attributes.py``
2. Make sure the prepared observation CSV carries the column
"""

from benthic_affinity.reference.attributes import CATEGORICAL_ATTRIBUTES as CATEGORICAL_ATTRIBUTES
from benthic_affinity.reference.attributes import CATEGORICAL_NAMES as CATEGORICAL_NAMES
from benthic_affinity.reference.attributes import CONTINUOUS_ATTRIBUTES as CONTINUOUS_ATTRIBUTES
from benthic_affinity.reference.attributes import CONTINUOUS_NAMES as CONTINUOUS_NAMES
from benthic_affinity.reference.attributes import MISSING_CATEGORY as MISSING_CATEGORY
from benthic_affinity.reference.attributes import AttributeSpec as AttributeSpec
from benthic_affinity.reference.attributes import category_column as category_column
from benthic_affinity.reference.traits import TRAIT_FIELDS as TRAIT_FIELDS
from benthic_affinity.reference.traits import TRAIT_NAMES as TRAIT_NAMES
from benthic_affinity.reference.traits import TraitSpec as TraitSpec
