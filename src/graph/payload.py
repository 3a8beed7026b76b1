"""
Graph Payload Loader
====================
Validates the materialized ``(nodes, links)`` payload handed over by the
data-access layer, and adapts the investment-network export format
(companies / vcs / investments) into that payload.

Shape errors fail fast with ``PayloadError`` so the host can show an
"invalid data" state instead of a silently broken layout. Dangling link
references are NOT a shape error; they are dropped later, when the graph
arena is built.
"""

import json
import logging
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

PRIMARY = 'primary'
SECONDARY = 'secondary'

# Category given to every VC node built from investment data
VC_CATEGORY = 'VC'


class PayloadError(ValueError):
    """Raised when a payload is missing required fields or is malformed."""


# ============================================================
# RECORD MODELS
# ============================================================

class NodeRecord(BaseModel):
    """A single node as delivered by the data-access layer."""
    id: str = Field(..., min_length=1)
    name: str
    category: str
    magnitude: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Valuation or total investment; None lets secondary nodes aggregate link weights"
    )
    kind: Literal['primary', 'secondary'] = PRIMARY

    @model_validator(mode='after')
    def check_magnitude(self) -> 'NodeRecord':
        if self.magnitude is None and self.kind == PRIMARY:
            raise ValueError(f"Primary node '{self.id}' requires a magnitude")
        return self


class LinkRecord(BaseModel):
    """A weighted, directed link between two node ids."""
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(..., alias='sourceId', min_length=1)
    target_id: str = Field(..., alias='targetId', min_length=1)
    weight: float = Field(..., ge=0, allow_inf_nan=False)
    label: str = ''


class GraphPayload(BaseModel):
    """Complete input for one visualization run."""
    nodes: List[NodeRecord] = Field(default_factory=list)
    links: List[LinkRecord] = Field(default_factory=list)


# ============================================================
# LOADERS
# ============================================================

def load_payload(data: Union[dict, GraphPayload]) -> GraphPayload:
    """
    Validate a raw ``{nodes, links}`` mapping.

    Args:
        data: Decoded JSON mapping, or an already validated payload

    Returns:
        GraphPayload

    Raises:
        PayloadError: if any record is missing a required field or
            carries an invalid value
    """
    if isinstance(data, GraphPayload):
        return data
    if not isinstance(data, dict):
        raise PayloadError(f"Payload must be a mapping, got {type(data).__name__}")

    try:
        payload = GraphPayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid graph payload: {e}") from e

    logger.info("Loaded payload: %d nodes, %d links", len(payload.nodes), len(payload.links))
    return payload


def from_investment_data(data: dict) -> GraphPayload:
    """
    Convert the investment export format into a graph payload.

    Expected shape::

        {
            "companies":   [{"name", "valuation", "sector"}, ...],
            "vcs":         [{"name", "totalInvestment"?, "location"?}, ...],
            "investments": [{"vc", "company", "amount"}, ...]
        }

    Companies become primary nodes categorized by sector and sized by
    valuation. VCs become secondary nodes; when ``totalInvestment`` is
    absent their magnitude is aggregated from their investments.
    Investments become ``vc -> company`` links weighted by amount.
    """
    if not isinstance(data, dict):
        raise PayloadError(f"Investment data must be a mapping, got {type(data).__name__}")

    nodes = []
    links = []
    try:
        for company in data.get('companies', []):
            nodes.append({
                'id': company['name'],
                'name': company['name'],
                'category': company['sector'],
                'magnitude': company['valuation'],
                'kind': PRIMARY,
            })
        for vc in data.get('vcs', []):
            nodes.append({
                'id': vc['name'],
                'name': vc['name'],
                'category': VC_CATEGORY,
                'magnitude': vc.get('totalInvestment'),
                'kind': SECONDARY,
            })
        for inv in data.get('investments', []):
            links.append({
                'source_id': inv['vc'],
                'target_id': inv['company'],
                'weight': inv['amount'],
            })
    except (KeyError, TypeError) as e:
        raise PayloadError(f"Invalid investment data: missing field {e}") from e

    return load_payload({'nodes': nodes, 'links': links})


def load_payload_file(path: Union[str, Path]) -> GraphPayload:
    """
    Read a payload from a JSON file.

    Files with a top-level ``companies`` key are treated as investment
    exports; everything else must already be ``{nodes, links}``.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise PayloadError(f"{path}: not valid JSON ({e})") from e

    if isinstance(data, dict) and 'companies' in data:
        logger.info("Reading investment export: %s", path)
        return from_investment_data(data)
    return load_payload(data)
