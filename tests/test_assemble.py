import hashlib
import json

from safetysnap.assemble import assemble, canonical_detections, cap_per_class, detection_hash
from safetysnap.detections import BBox, Detection


def det(label, conf, x=0.0, y=0.0, w=0.1, h=0.1, source=""):
    return Detection(label, conf, BBox(x, y, w, h), source=source)


def test_empty_input_hash():
    dets, h = assemble([])
    assert dets == []
    assert h == hashlib.md5(b"[]").hexdigest()


def test_floor_is_exclusive():
    dets, _ = assemble([det("helmet", 0.6), det("vest", 0.61, x=0.5)])
    assert [(d.label, d.confidence) for d in dets] == [("vest", 0.61)]


def test_cross_source_duplicates_collapse():
    scanned = det("helmet", 0.9, 0.1, 0.1, 0.2, 0.2, source="helmet")
    from_kit = det("helmet", 0.8, 0.12, 0.1, 0.2, 0.2, source="full_kit")
    dets, _ = assemble([scanned, from_kit])
    assert dets == [scanned]


def test_class_caps():
    cands = [det("helmet", 0.9 - i * 0.01, x=i * 0.2) for i in range(4)]
    cands += [det("vest", 0.8 - i * 0.01, x=i * 0.2, y=0.5) for i in range(3)]
    cands += [det("person", 0.7, x=0.0, y=0.8), det("person", 0.75, x=0.5, y=0.8)]
    dets, _ = assemble(cands)
    labels = [d.label for d in dets]
    assert labels.count("helmet") == 2
    assert labels.count("vest") == 2
    assert labels.count("person") == 1
    assert [d.confidence for d in dets if d.label == "person"] == [0.75]
    assert [d.confidence for d in dets] == sorted((d.confidence for d in dets), reverse=True)


def test_cap_keeps_highest():
    capped = cap_per_class([det("person", 0.7), det("person", 0.9, x=0.5)])
    assert [d.confidence for d in capped] == [0.9]


def test_equal_confidence_keeps_discovery_order():
    person = det("person", 0.8, x=0.0)
    helmet = det("helmet", 0.8, x=0.3)
    vest = det("vest", 0.8, x=0.6)
    late_helmet = det("helmet", 0.8, x=0.9, w=0.05)
    dets, _ = assemble([person, helmet, vest, late_helmet])
    assert dets == [person, helmet, vest, late_helmet]


def test_canonical_rounding():
    canon = canonical_detections([det("vest", 0.956, x=0.12345, y=0.5, w=0.1, h=0.25)])
    assert canon == [{
        "label": "vest",
        "confidence": "0.96",
        "bbox": {"x": "0.123", "y": "0.500", "width": "0.100", "height": "0.250"},
    }]
    payload = json.dumps(canon, separators=(",", ":")).encode()
    assert detection_hash([det("vest", 0.956, x=0.12345, y=0.5, w=0.1, h=0.25)]) == hashlib.md5(payload).hexdigest()


def test_hash_ignores_sub_rounding_noise_and_source():
    a = [det("helmet", 0.801, x=0.1004, source="helmet")]
    b = [det("helmet", 0.804, x=0.1001, source="full_kit")]
    assert detection_hash(a) == detection_hash(b)
    assert detection_hash(a) != detection_hash([det("helmet", 0.81, x=0.1)])


def test_hash_depends_on_order():
    a = det("helmet", 0.9, x=0.0)
    b = det("vest", 0.9, x=0.5)
    assert detection_hash([a, b]) != detection_hash([b, a])
    assert len(detection_hash([a])) == 32
    assert len(detection_hash([a], algorithm="sha256")) == 64
