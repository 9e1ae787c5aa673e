"""Azure Functions app exposing the Intune policy HTTP triggers.

Routes (any method is routed here; only POST is accepted by the handlers):
  - /api/HttpTriggerCreatePolicies  compliance policy create + assign
  - /api/HttpTriggerUpdateRings     update ring create + assign
"""

from __future__ import annotations

import azure.functions as func

from intune_policy_functions.config import SettingsManager
from intune_policy_functions.handlers import CompliancePolicyHandler, UpdateRingHandler
from intune_policy_functions.utils import LoggingOptions, configure_logging

configure_logging(LoggingOptions.from_settings(SettingsManager().load()))

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


@app.function_name(name=CompliancePolicyHandler.function_name)
@app.route(route="HttpTriggerCreatePolicies")
async def create_compliance_policy(req: func.HttpRequest) -> func.HttpResponse:
    return await CompliancePolicyHandler().handle(req)


@app.function_name(name=UpdateRingHandler.function_name)
@app.route(route="HttpTriggerUpdateRings")
async def create_update_ring(req: func.HttpRequest) -> func.HttpResponse:
    return await UpdateRingHandler().handle(req)
