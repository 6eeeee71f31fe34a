"""
Demo Manager - Scaffolds an example dependency graph.

This module provides the sample org metadata used by `depmesh demo` and
`depmesh init`: a small CRM schema whose objects, flows, triggers and
fields are wired together so both the force and layered views have
something meaningful to show on first run.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .types import GraphData

logger = logging.getLogger(__name__)


class DemoManager:
    """
    Manages the creation of the demo graph.
    """

    # Dependency view: objects referencing each other, automations touching them
    DEPENDENCY_GRAPH: Dict[str, Any] = {
        "nodes": [
            {"id": "Account", "group": "Object", "label": "Account", "weight": 20,
             "metadata": {"apiName": "Account"}},
            {"id": "Opportunity", "group": "Object", "label": "Opportunity", "weight": 20,
             "metadata": {"apiName": "Opportunity"}},
            {"id": "Contact", "group": "Object", "label": "Contact", "weight": 15,
             "metadata": {"apiName": "Contact"}},
            {"id": "Update_Opp_Amount", "group": "Flow", "label": "Update Opp Amount", "weight": 10,
             "metadata": {"apiName": "Update_Opp_Amount", "type": "RecordTriggeredFlow"}},
            {"id": "Acc_After_Update", "group": "Trigger", "label": "Acc After Update", "weight": 8,
             "metadata": {"apiName": "AccAfterUpdate", "parentApiName": "Account"}},
            {"id": "Close_Date_Rule", "group": "Field", "label": "Close Date Rule", "weight": 5,
             "metadata": {"apiName": "Close_Date_Rule__c", "parentApiName": "Opportunity"}},
            {"id": "Opp_Stage_Change", "group": "Flow", "label": "Opp Stage Change", "weight": 10,
             "metadata": {"apiName": "Opp_Stage_Change", "type": "AutoLaunchedFlow"}},
            {"id": "Risk_Score", "group": "Field", "label": "Risk Score", "weight": 5,
             "metadata": {"apiName": "Risk_Score__c", "parentApiName": "Account"}},
            {"id": "AnnualRevenue", "group": "Field", "label": "AnnualRevenue", "weight": 5,
             "metadata": {"apiName": "AnnualRevenue", "parentApiName": "Account"}},
            {"id": "Sync_ERP", "group": "Trigger", "label": "Sync ERP", "weight": 8,
             "metadata": {"apiName": "SyncERP", "parentApiName": "Contact"}},
        ],
        "links": [
            {"source": "Account", "target": "Opportunity", "type": "reference"},
            {"source": "Account", "target": "Contact", "type": "reference"},
            {"source": "Update_Opp_Amount", "target": "Opportunity", "type": "update"},
            {"source": "Acc_After_Update", "target": "Account", "type": "trigger"},
            {"source": "Acc_After_Update", "target": "Risk_Score", "type": "update"},
            {"source": "AnnualRevenue", "target": "Risk_Score", "type": "reference"},
            {"source": "Opportunity", "target": "Opp_Stage_Change", "type": "trigger"},
            {"source": "Opp_Stage_Change", "target": "Close_Date_Rule", "type": "reference"},
            {"source": "Contact", "target": "Sync_ERP", "type": "trigger"},
        ],
    }

    # Process view: an opportunity lifecycle laid out left to right
    PROCESS_GRAPH: Dict[str, Any] = {
        "nodes": [
            {"id": "stage_prospecting", "group": "Object", "label": "Prospecting", "level": 0},
            {"id": "flow_qualify", "group": "Flow", "label": "Qualify Lead Assignment", "level": 1},
            {"id": "stage_qualification", "group": "Object", "label": "Qualification", "level": 2},
            {"id": "trg_discount", "group": "Trigger", "label": "Discount Approval Trigger", "level": 3},
            {"id": "field_amount", "group": "Field", "label": "Amount", "level": 3},
            {"id": "stage_negotiation", "group": "Object", "label": "Negotiation/Review", "level": 4},
            {"id": "flow_close", "group": "Flow", "label": "Closed Won Notification Flow", "level": 5},
            {"id": "stage_closed", "group": "Object", "label": "Closed Won", "level": 6},
        ],
        "links": [
            {"source": "stage_prospecting", "target": "flow_qualify", "type": "process_step"},
            {"source": "flow_qualify", "target": "stage_qualification", "type": "process_step"},
            {"source": "stage_qualification", "target": "trg_discount", "type": "process_step"},
            {"source": "stage_qualification", "target": "field_amount", "type": "update"},
            {"source": "trg_discount", "target": "stage_negotiation", "type": "process_step"},
            {"source": "field_amount", "target": "stage_negotiation", "type": "reference"},
            {"source": "stage_negotiation", "target": "flow_close", "type": "process_step"},
            {"source": "flow_close", "target": "stage_closed", "type": "process_step"},
        ],
    }

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir

    @classmethod
    def dependency_graph(cls) -> GraphData:
        return GraphData.model_validate(cls.DEPENDENCY_GRAPH)

    @classmethod
    def process_graph(cls) -> GraphData:
        return GraphData.model_validate(cls.PROCESS_GRAPH)

    def provision(self) -> Path:
        """
        Write the demo graphs to disk.

        Returns:
            Path: The directory holding graph.json and process.json.
        """
        demo_dir = self.root_dir / "depmesh-demo"
        demo_dir.mkdir(parents=True, exist_ok=True)

        (demo_dir / "graph.json").write_text(json.dumps(self.DEPENDENCY_GRAPH, indent=2))
        (demo_dir / "process.json").write_text(json.dumps(self.PROCESS_GRAPH, indent=2))

        logger.debug(f"Provisioned demo graphs in {demo_dir}")
        return demo_dir
