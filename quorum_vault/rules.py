from enum import Enum


class ThresholdRule(Enum):
    """When a signature count is enough to execute a transaction"""

    # count > threshold: a threshold of N needs N + 1 signatures
    EXCEED = "exceed"
    # count >= threshold
    REACH = "reach"

    def is_met(self, signatures: int, threshold: int) -> bool:
        """Check if the signature count triggers execution"""
        if self is ThresholdRule.EXCEED:
            return signatures > threshold
        return signatures >= threshold

    def required_signatures(self, threshold: int) -> int:
        """Number of distinct signatures execution needs"""
        if self is ThresholdRule.EXCEED:
            return threshold + 1
        return threshold

    def is_reachable(self, threshold: int, owner_count: int) -> bool:
        """Check if the owner set can ever produce enough signatures"""
        return self.required_signatures(threshold) <= owner_count
