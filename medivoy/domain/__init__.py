"""Pure lifecycle domain logic: statuses, workflow, pricing and notification rules."""
