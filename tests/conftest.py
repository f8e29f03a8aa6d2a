"""Shared fixtures for SreBuddy tests."""

import logging

import pytest

from srebuddy.prompts import configure_fallback_loader
from srebuddy.utils.logging import configure_logging


SAMPLE_CORPUS = """# SreBuddy Copilot Instructions

General guidance that is not a template.

## SRE Implement Prompts

### Examples
- implement dynatrace agent in kubernetes
- install dynatrace oneagent

### Prompt
You are an SRE assistant.
Implement {target} in {environment}.

Request: {rawInput} ({type})

### Tags
- dynatrace
- oneagent

## Prompt Templates for Deploy

**Examples**
- deploy redis cluster with helm

**Prompt**
Deploy {target} to {environment} using helm.

**Tags**
- helm

## LLM Monitor Instructions

### Examples
- monitor prometheus alerts

### Prompt
Set up monitoring for {target}.

## SRE Configure Prompts

### Examples
- configure nginx

## Release Notes

### Examples
- not a template

### Prompt
Ignored.
"""


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep structlog output at warning level during tests."""
    configure_logging(logging.WARNING)
    yield


@pytest.fixture(autouse=True)
def reset_fallback_loader():
    """Reset the global fallback prompt loader between tests."""
    configure_fallback_loader(None)
    yield
    configure_fallback_loader(None)


@pytest.fixture
def sample_corpus() -> str:
    """A corpus with three valid templates and two sections that are dropped."""
    return SAMPLE_CORPUS


@pytest.fixture
def corpus_file(tmp_path, sample_corpus):
    """The sample corpus written to .github/copilot-instructions.md."""
    path = tmp_path / ".github" / "copilot-instructions.md"
    path.parent.mkdir(parents=True)
    path.write_text(sample_corpus, encoding="utf-8")
    return path
