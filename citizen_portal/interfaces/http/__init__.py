"""HTTP interface: request dependencies and error rendering."""
