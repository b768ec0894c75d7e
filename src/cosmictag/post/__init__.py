"""Post-processors which add reconstruction products to each entry.

Each post-processor is configured under the `post` block of the
configuration, under its name:

.. code-block:: yaml

    post:
      cosmic_pca_tagger:
        x_margin: 5
        priority: 1
"""

from .manager import PostManager
