# safetysnap/merge.py
import logging

log = logging.getLogger(__name__)


def iou(A, B):
    ax1, ay1, ax2, ay2 = A.corners(); bx1, by1, bx2, by2 = B.corners()
    xA = max(ax1, bx1); yA = max(ay1, by1); xB = min(ax2, bx2); yB = min(ay2, by2)
    interW = max(0.0, xB - xA); interH = max(0.0, yB - yA); inter = interW * interH
    if inter <= 0:
        return 0.0
    u = A.area + B.area - inter
    return inter / u if u > 0 else 0.0


def suppress_overlaps(detections, threshold):
    """Keep the best box of every overlapping same-label cluster.

    Candidates are visited by confidence, highest first (stable, so equal scores keep
    discovery order). Any later candidate of the same label whose IoU with the kept
    box reaches `threshold` is dropped. Kept boxes are returned unmodified.
    """
    ordered = sorted(detections, key=lambda d: d.confidence, reverse=True)
    used = [False] * len(ordered)
    kept = []
    for i, current in enumerate(ordered):
        if used[i]:
            continue
        used[i] = True
        kept.append(current)
        for j in range(i + 1, len(ordered)):
            if used[j] or ordered[j].label != current.label:
                continue
            if iou(current.bbox, ordered[j].bbox) >= threshold:
                used[j] = True
    if len(kept) != len(ordered):
        log.debug("suppressed %d of %d candidates at IoU>=%.2f", len(ordered) - len(kept), len(ordered), threshold)
    return kept
