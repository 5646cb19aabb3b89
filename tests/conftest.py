"""Wspólne fixtures: poprawny dokument Structured MADR i walidator ze schematem."""

import pytest

from validator import AdrValidator, load_default_schema


FRONTMATTER = """\
---
title: Use PostgreSQL for persistence
description: Decide on the primary datastore for the billing service.
type: adr
category: architecture
tags:
  - database
  - postgresql
status: accepted
created: 2025-01-10
updated: 2025-02-01
author: Platform Team
project: billing-service
---
"""

BODY = """\

# ADR-0001: Use PostgreSQL for persistence

## Status

Accepted

## Context

### Background and Problem Statement

The billing service needs a transactional datastore.

### Current Limitations

Invoices are kept in flat files.

## Decision Drivers

### Primary Decision Drivers

1. Transactional integrity

### Secondary Decision Drivers

1. Operational cost

## Considered Options

### Option 1: PostgreSQL

**Advantages**:
- Mature and well understood

**Disadvantages**:
- Requires a managed instance

**Risk Assessment**:
- Technical Risk: Low

### Option 2: MongoDB

Advantages: flexible documents
Disadvantages: weaker multi-document transactions
Risk Assessment: medium

## Decision

We will use PostgreSQL 16 as the primary datastore.

```sql
-- example schema
CREATE TABLE invoice (id bigint primary key);
```

## Consequences

### Positive

- Strong consistency

### Negative

- Another service to operate

### Neutral

- Team already knows SQL

## Decision Outcome

PostgreSQL satisfies every primary driver.

## Related Decisions

No related decisions yet.

## Links

- [PostgreSQL documentation](https://www.postgresql.org/docs/)

## More Information

Reviewed by the architecture board.

## Audit

### 2025-02-01

**Status:** Compliant

**Findings:**

| Finding | Files | Lines | Assessment |
|---------|-------|-------|------------|
| Datastore configured | config/db.py | 1-20 | compliant |

**Summary:** Implementation follows the decision.

**Action Required:** None
"""

VALID_ADR = FRONTMATTER + BODY


def with_metadata(**fields: str) -> str:
    """Dokument z podmienionymi polami metadanych (wartości jako tekst YAML)."""
    lines = FRONTMATTER.splitlines()
    out = []
    replacing = False
    for line in lines:
        if replacing and line.startswith("  - "):
            continue  # elementy listy zastąpionego pola
        replacing = False
        key = line.split(":", 1)[0]
        if key in fields:
            value = fields.pop(key)
            if value is not None:
                out.append(f"{key}: {value}")
            replacing = True
            continue
        out.append(line)
    # nowe pola przed zamykającym '---'
    extra = [f"{k}: {v}" for k, v in fields.items() if v is not None]
    out = out[:-1] + extra + out[-1:]
    return "\n".join(out) + "\n" + BODY


@pytest.fixture
def valid_adr() -> str:
    return VALID_ADR


@pytest.fixture
def schema() -> dict:
    return load_default_schema()


@pytest.fixture
def validator(schema) -> AdrValidator:
    return AdrValidator(schema)
