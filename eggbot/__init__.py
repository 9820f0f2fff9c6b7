"""Serial control of a MaxArm robot arm, a bounded FIFO and register layouts for MPU-6050 and AK8963 sensors."""

__version__ = "0.1.0"