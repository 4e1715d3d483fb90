"""Physics layer (network geometry).

- Transmitter/receiver pair layout (PointSet)
- TX -> RX cross distances and own-pair rescaling
"""
