"""I/O classes which load entries and store cosmic tags.

Readers and writers are instantiated from the `io` block of the
configuration, e.g.

.. code-block:: yaml

    io:
      reader:
        name: csv
        file_keys: /path/to/products/*
      writer:
        name: csv
        file_name: cosmic_tags.csv
"""

from .factories import reader_factory, writer_factory
