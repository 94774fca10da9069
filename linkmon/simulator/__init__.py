"""Channel-quality core (propagation, channel model, recorder, plot sinks).

The sub-modules are intentionally kept lightweight to ease unit testing and to
allow the channel model to be reused outside the recorder loop.
"""
