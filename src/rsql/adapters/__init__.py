"""Host adapters that drive the editor engine from a UI toolkit."""
