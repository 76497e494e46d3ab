# safetysnap/assemble.py
import hashlib
import json
import logging
from collections import OrderedDict

from safetysnap import config
from safetysnap.merge import suppress_overlaps

log = logging.getLogger(__name__)


def group_by_label(detections):
    groups = OrderedDict()
    for d in detections:
        groups.setdefault(d.label, []).append(d)
    return groups


def cap_per_class(detections, caps=None):
    caps = config.CLASS_CAPS if caps is None else caps
    out = []
    for label, group in group_by_label(detections).items():
        group = sorted(group, key=lambda d: d.confidence, reverse=True)
        out.extend(group[:caps.get(label, config.DEFAULT_CLASS_CAP)])
    return out


def canonical_detections(detections):
    c = config.HASH_CONFIDENCE_DIGITS; b = config.HASH_BBOX_DIGITS
    return [
        {
            "label": d.label,
            "confidence": f"{d.confidence:.{c}f}",
            "bbox": {
                "x": f"{d.bbox.x:.{b}f}",
                "y": f"{d.bbox.y:.{b}f}",
                "width": f"{d.bbox.width:.{b}f}",
                "height": f"{d.bbox.height:.{b}f}",
            },
        }
        for d in detections
    ]


def digest(payload: bytes, algorithm=None) -> str:
    return hashlib.new(algorithm or config.HASH_ALGORITHM, payload).hexdigest()


def detection_hash(detections, algorithm=None) -> str:
    payload = json.dumps(canonical_detections(detections), separators=(",", ":"), sort_keys=False)
    return digest(payload.encode("utf-8"), algorithm)


def assemble(candidates, floor=None):
    """Floor, cross-source suppression, per-class cap and final ordering.

    `candidates` is the concatenation of every class pipeline's output in discovery
    order. Returns ``(detections, hash)``.
    """
    floor = config.CONFIDENCE_FLOOR if floor is None else floor
    kept = [d for d in candidates if d.confidence > floor]
    merged = []
    for group in group_by_label(kept).values():
        merged.extend(suppress_overlaps(group, config.GENERIC_MERGE_IOU))
    rank = {id(d): i for i, d in enumerate(kept)}
    final = sorted(cap_per_class(merged), key=lambda d: (-d.confidence, rank[id(d)]))
    log.debug("assembled %d detections from %d candidates", len(final), len(candidates))
    return final, detection_hash(final)
