"""Core functionality for tagwatch: paths, configuration and theming."""
