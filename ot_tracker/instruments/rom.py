"""Range-of-motion instrument: joint movements grouped by body region.

Normal ranges are in degrees. Bilateral movements are recorded separately for
the left and right side under the keys ``<id>_left`` and ``<id>_right``;
unilateral (axial) movements are recorded under the bare id.
"""

from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict


class ROMRegion(str, Enum):
    """Body region, in display order."""

    SHOULDER = "shoulder"
    ELBOW = "elbow"
    WRIST = "wrist"
    HIP = "hip"
    KNEE = "knee"
    ANKLE = "ankle"
    SPINE = "spine"


class ROMSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BILATERAL = "bilateral"


class NormalRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = 0
    max: float


class ROMMeasurement(BaseModel):
    """Definition of one measurable movement."""

    model_config = ConfigDict(frozen=True)

    id: str
    region: ROMRegion
    movement: str
    normal_range: NormalRange
    description: str
    bilateral: bool = True

    @property
    def keys(self) -> list[str]:
        """Measurement-set keys this movement is recorded under."""
        if self.bilateral:
            return [measurement_key(self.id, ROMSide.LEFT), measurement_key(self.id, ROMSide.RIGHT)]
        return [self.id]


def _m(
    id: str,
    region: ROMRegion,
    movement: str,
    normal_max: float,
    description: str,
    bilateral: bool = True,
) -> ROMMeasurement:
    return ROMMeasurement(
        id=id,
        region=region,
        movement=movement,
        normal_range=NormalRange(min=0, max=normal_max),
        description=description,
        bilateral=bilateral,
    )


ROM_MEASUREMENTS: tuple[ROMMeasurement, ...] = (
    # Shoulder
    _m("shoulder_flexion", ROMRegion.SHOULDER, "Flexion", 180, "Raise arm forward and upward"),
    _m("shoulder_extension", ROMRegion.SHOULDER, "Extension", 60, "Move arm backward"),
    _m("shoulder_abduction", ROMRegion.SHOULDER, "Abduction", 180, "Raise arm out to the side"),
    _m("shoulder_adduction", ROMRegion.SHOULDER, "Adduction", 50, "Move arm across body"),
    _m("shoulder_internal_rotation", ROMRegion.SHOULDER, "Internal Rotation", 70, "Rotate arm inward"),
    _m("shoulder_external_rotation", ROMRegion.SHOULDER, "External Rotation", 90, "Rotate arm outward"),
    # Elbow / forearm
    _m("elbow_flexion", ROMRegion.ELBOW, "Flexion", 150, "Bend elbow"),
    _m("elbow_extension", ROMRegion.ELBOW, "Extension", 0, "Straighten elbow"),
    _m("forearm_supination", ROMRegion.ELBOW, "Supination", 80, "Rotate forearm palm up"),
    _m("forearm_pronation", ROMRegion.ELBOW, "Pronation", 80, "Rotate forearm palm down"),
    # Wrist
    _m("wrist_flexion", ROMRegion.WRIST, "Flexion", 80, "Bend wrist forward"),
    _m("wrist_extension", ROMRegion.WRIST, "Extension", 70, "Bend wrist backward"),
    _m("wrist_radial_deviation", ROMRegion.WRIST, "Radial Deviation", 20, "Bend wrist toward thumb"),
    _m("wrist_ulnar_deviation", ROMRegion.WRIST, "Ulnar Deviation", 30, "Bend wrist toward pinky"),
    # Hip
    _m("hip_flexion", ROMRegion.HIP, "Flexion", 120, "Raise thigh toward chest"),
    _m("hip_extension", ROMRegion.HIP, "Extension", 30, "Move thigh backward"),
    _m("hip_abduction", ROMRegion.HIP, "Abduction", 45, "Move leg out to side"),
    _m("hip_adduction", ROMRegion.HIP, "Adduction", 30, "Move leg across body"),
    _m("hip_internal_rotation", ROMRegion.HIP, "Internal Rotation", 45, "Rotate thigh inward"),
    _m("hip_external_rotation", ROMRegion.HIP, "External Rotation", 45, "Rotate thigh outward"),
    # Knee
    _m("knee_flexion", ROMRegion.KNEE, "Flexion", 135, "Bend knee"),
    _m("knee_extension", ROMRegion.KNEE, "Extension", 0, "Straighten knee"),
    # Ankle
    _m("ankle_dorsiflexion", ROMRegion.ANKLE, "Dorsiflexion", 20, "Bring toes toward shin"),
    _m("ankle_plantarflexion", ROMRegion.ANKLE, "Plantarflexion", 50, "Point toes downward"),
    _m("ankle_inversion", ROMRegion.ANKLE, "Inversion", 35, "Turn sole of foot inward"),
    _m("ankle_eversion", ROMRegion.ANKLE, "Eversion", 15, "Turn sole of foot outward"),
    # Spine
    _m("cervical_flexion", ROMRegion.SPINE, "Cervical Flexion", 45, "Bend neck forward", bilateral=False),
    _m("cervical_extension", ROMRegion.SPINE, "Cervical Extension", 45, "Bend neck backward", bilateral=False),
    _m("cervical_lateral_flexion", ROMRegion.SPINE, "Cervical Lateral Flexion", 45, "Bend neck to side"),
    _m("cervical_rotation", ROMRegion.SPINE, "Cervical Rotation", 60, "Turn head to side"),
    _m("lumbar_flexion", ROMRegion.SPINE, "Lumbar Flexion", 80, "Bend trunk forward", bilateral=False),
    _m("lumbar_extension", ROMRegion.SPINE, "Lumbar Extension", 25, "Bend trunk backward", bilateral=False),
    _m("lumbar_lateral_flexion", ROMRegion.SPINE, "Lumbar Lateral Flexion", 25, "Bend trunk to side"),
    _m("lumbar_rotation", ROMRegion.SPINE, "Lumbar Rotation", 45, "Rotate trunk to side"),
)

REGION_NAMES: dict[ROMRegion, str] = {
    ROMRegion.SHOULDER: "Shoulder",
    ROMRegion.ELBOW: "Elbow/Forearm",
    ROMRegion.WRIST: "Wrist",
    ROMRegion.HIP: "Hip",
    ROMRegion.KNEE: "Knee",
    ROMRegion.ANKLE: "Ankle",
    ROMRegion.SPINE: "Spine",
}


def measurement_key(measurement_id: str, side: Optional[ROMSide | str] = None) -> str:
    """Build the measurement-set key for a movement, optionally per side."""
    if side:
        return f"{measurement_id}_{ROMSide(side).value}"
    return measurement_id


def get_measurements_by_region(
    region: ROMRegion | str,
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> list[ROMMeasurement]:
    """Return the movements of a region in catalog order. Unknown regions yield []."""
    return [m for m in catalog if m.region == region]


def region_label(region: ROMRegion | str) -> str:
    try:
        return REGION_NAMES[ROMRegion(region)]
    except ValueError:
        return str(region)
