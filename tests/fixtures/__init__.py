"""Value objects, resources and handlers shared by the invoker-core tests."""
