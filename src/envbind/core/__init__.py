"""Binding engine: field walker, directives, precedence policy, coercion and validation."""
