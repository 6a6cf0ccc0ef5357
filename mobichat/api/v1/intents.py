from fastapi import APIRouter, Depends

from mobichat.api.v1.schemas import AnalyzeIntentRequestSchema, ServiceIntentSchema
from mobichat.application.use_cases.classify_intent import ClassifyIntentUseCase
from mobichat.wiring.dependencies import get_classify_intent_use_case

router = APIRouter()


@router.post("/analyze-intent", response_model=ServiceIntentSchema)
def analyze_intent(
    req: AnalyzeIntentRequestSchema,
    uc: ClassifyIntentUseCase = Depends(get_classify_intent_use_case),
):
    return ServiceIntentSchema.from_entity(uc.execute(req.text))
