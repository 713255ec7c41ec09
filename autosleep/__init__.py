"""
Autosleep service broker core.

Subpackages:
- domain: Enrollment enumerations, application bindings and the typed
  service instance parameters
- parameters: Readers that validate raw request parameters into domain
  values
- repositories: Binding repository protocols with memory and PostgreSQL
  implementations
"""
