"""Performance metric model."""

from pydantic import BaseModel, ConfigDict, Field


class PerformanceMetric(BaseModel):
    """A single performance measurement attached to a check result.

    No ordering is enforced between the thresholds and the range; whatever
    is given is rendered as-is.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    value: float = Field(0.0, description="The measured value")
    warn: float = Field(0.0, description="The warning threshold")
    crit: float = Field(0.0, description="The critical threshold")
    min: float = Field(0.0, description="The minimum possible value")
    max: float = Field(0.0, description="The maximum possible value")
    unit: str = Field("", description="The unit of measure, e.g. 'ms' or '%'")

    def to_perfdata(self, name: str) -> str:
        """Format this metric as a single perfdata token.

        Args:
            name: The metric label.

        Returns:
            str: ``'<name>'=<value><unit>;<warn>;<crit>;<min>;<max>``
        """
        return (
            f"'{name}'={self.value:.2f}{self.unit};"
            f"{self.warn:.2f};{self.crit:.2f};{self.min:.2f};{self.max:.2f}"
        )
