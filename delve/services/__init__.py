# Service package init (simulation services import their dependencies directly)
