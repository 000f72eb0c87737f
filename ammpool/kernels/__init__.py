"""
Kernel layer.

`ammpool/kernels/python/` holds the integer math shared by the spend and
issuance validators. Validators call into it only after checking the
documented preconditions, so a kernel ValueError never escapes a verdict.
"""
