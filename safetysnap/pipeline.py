# safetysnap/pipeline.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from safetysnap import config
from safetysnap.assemble import assemble, digest
from safetysnap.detections import BBox, Detection
from safetysnap.errors import DecodeFailure
from safetysnap.features import extract_features
from safetysnap.merge import suppress_overlaps
from safetysnap.pixels import decode_image
from safetysnap.regions import scan_regions, whole_image
from safetysnap.scoring import SCORERS, score_person

log = logging.getLogger(__name__)


def _region_box(region):
    return BBox.from_pixels(region.x, region.y, region.w, region.h, region.image_width, region.image_height)


def scan_class(pixels, cls):
    """Accepted window candidates for one class, in scan order, before suppression."""
    scorer = SCORERS[cls]
    out = []
    for region in scan_regions(pixels, config.SCAN_PLANS[cls]):
        score = scorer(extract_features(region))
        if score.accepted:
            out.append(Detection(cls, score.confidence, _region_box(region), source=cls, color=score.color))
    return out


def detect_helmets(pixels):
    return suppress_overlaps(scan_class(pixels, config.HELMET), config.MERGE_IOU[config.HELMET])


def detect_vests(pixels):
    return suppress_overlaps(scan_class(pixels, config.VEST), config.MERGE_IOU[config.VEST])


def detect_persons(pixels):
    candidates = []
    presence = score_person(extract_features(whole_image(pixels)), upright_ratio=pixels.height / pixels.width)
    if presence.accepted:
        candidates.append(Detection(config.PERSON, presence.confidence, BBox(*config.PERSON_PRESENCE_BOX), source="presence"))
    candidates.extend(scan_class(pixels, config.PERSON))
    return suppress_overlaps(candidates, config.MERGE_IOU[config.PERSON])


def detect_full_kit(pixels):
    """Helmet/vest pairs decomposed from uniform protective-suit windows.

    A window yields its pair only when it covers both the head line and the torso
    line; otherwise neither part is emitted.
    """
    W, H = pixels.width, pixels.height
    scorer = SCORERS[config.FULL_KIT]
    conf = config.GATE_WEIGHTS[config.FULL_KIT]["role_match"]
    out = []
    for region in scan_regions(pixels, config.SCAN_PLANS[config.FULL_KIT]):
        score = scorer(extract_features(region))
        if not score.accepted:
            continue
        has_head = region.y < H * config.FULL_KIT_HEAD_MAX_Y
        has_body = region.y > H * config.FULL_KIT_BODY_MIN_Y
        if not (has_head and has_body):
            continue
        head_h = region.h * config.FULL_KIT_HEAD_FRACTION
        head = BBox.from_pixels(region.x, region.y, region.w, head_h, W, H)
        body = BBox.from_pixels(region.x, region.y + head_h, region.w, region.h - head_h, W, H)
        out.append(Detection(config.HELMET, conf, head, source=config.FULL_KIT, color=score.color))
        out.append(Detection(config.VEST, conf, body, source=config.FULL_KIT, color=score.color))
    return out


CLASS_PIPELINES = {
    config.PERSON: detect_persons,
    config.HELMET: detect_helmets,
    config.VEST: detect_vests,
    config.FULL_KIT: detect_full_kit,
}


def run_class_pipelines(pixels, parallel=None):
    parallel = config.PARALLEL if parallel is None else parallel
    if parallel:
        with ThreadPoolExecutor(max_workers=len(config.CLASS_ORDER), thread_name_prefix="safetysnap") as pool:
            futures = [(cls, pool.submit(CLASS_PIPELINES[cls], pixels)) for cls in config.CLASS_ORDER]
            results = {cls: fut.result() for cls, fut in futures}
    else:
        results = {cls: CLASS_PIPELINES[cls](pixels) for cls in config.CLASS_ORDER}
    for cls in config.CLASS_ORDER:
        log.debug("%s pipeline: %d candidates", cls, len(results[cls]))
    return results


def analyze(pixels, parallel=None):
    """Detect protective equipment in `pixels`; returns ``(detections, detections_hash)``."""
    results = run_class_pipelines(pixels, parallel)
    candidates = []
    for cls in config.CLASS_ORDER:
        candidates.extend(results[cls])
    return assemble(candidates)


def fallback_detections(filename):
    name = os.path.basename(filename or "").lower()
    out = []
    for label in (config.HELMET, config.VEST):
        if label in name:
            out.append(Detection(label, config.FALLBACK_CONFIDENCE, BBox(*config.FALLBACK_BOXES[label]), source="filename"))
    return out


@dataclass
class AnalysisResult:
    detections: list
    detections_hash: str
    file_hash: str
    filename: str = ""
    width: int = 0
    height: int = 0
    fallback: bool = False
    summary: dict = field(default_factory=dict)


def summarize(detections):
    best = {label: 0.0 for label in config.LABELS}
    for d in detections:
        best[d.label] = max(best.get(d.label, 0.0), d.confidence)
    has_helmet = best[config.HELMET] > 0; has_vest = best[config.VEST] > 0
    return {
        "has_helmet": has_helmet,
        "has_vest": has_vest,
        "has_person": best[config.PERSON] > 0,
        "safety_compliant": has_helmet and has_vest,
        "confidence": best,
    }


def analyze_upload(image_bytes, filename="", parallel=None):
    file_hash = digest(bytes(image_bytes or b""))
    try:
        pixels = decode_image(image_bytes)
    except DecodeFailure as exc:
        log.warning("decode failed for %r (%s); using filename fallback", filename, exc)
        detections, det_hash = assemble(fallback_detections(filename))
        return AnalysisResult(detections, det_hash, file_hash, filename=filename, fallback=True, summary=summarize(detections))
    detections, det_hash = analyze(pixels, parallel)
    return AnalysisResult(detections, det_hash, file_hash, filename=filename, width=pixels.width,
                          height=pixels.height, summary=summarize(detections))
