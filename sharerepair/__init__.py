"""Share repair tooling: remediation of over-exposing link shares."""
