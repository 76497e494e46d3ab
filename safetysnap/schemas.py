# safetysnap/schemas.py
from typing import Dict, List, Optional

from pydantic import BaseModel

from safetysnap import config


class BBoxOut(BaseModel):
    x: float
    y: float
    width: float
    height: float


class DetectionOut(BaseModel):
    label: str
    confidence: str
    bbox: BBoxOut
    color: Optional[str] = None

    @classmethod
    def from_detection(cls, d):
        return cls(label=d.label, confidence=f"{d.confidence:.2f}", bbox=BBoxOut(**d.bbox.as_dict()), color=d.color)


class SummaryOut(BaseModel):
    has_helmet: bool
    has_vest: bool
    has_person: bool
    safety_compliant: bool
    confidence: Dict[str, float]


class AnalysisOut(BaseModel):
    filename: str
    width: Optional[int] = None
    height: Optional[int] = None
    detections_hash: str
    file_hash: str
    fallback: bool = False
    detections: List[DetectionOut]
    summary: SummaryOut

    @classmethod
    def from_result(cls, result):
        return cls(
            filename=result.filename,
            width=result.width or None,
            height=result.height or None,
            detections_hash=result.detections_hash,
            file_hash=result.file_hash,
            fallback=result.fallback,
            detections=[DetectionOut.from_detection(d) for d in result.detections],
            summary=SummaryOut(**result.summary),
        )


class LabelOut(BaseModel):
    name: str
    description: str


def label_catalog():
    return [LabelOut(name=name, description=desc) for name, desc in config.LABELS.items()]
