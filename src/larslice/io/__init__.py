"""Input tools which load the hits of each event.

**Example Configuration:**
```yaml
io:
  reader:
    name: npz
    file_keys: /path/to/events/*.npz
    n_entry: 100
```
"""

from .factories import reader_factory
