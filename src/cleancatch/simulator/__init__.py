"""Desktop pygame simulator for Clean Catch."""
