"""
Protocol buffer contracts for sibling services.

`par_pro_pb2` (messages) and `par_pro_pb2_grpc` (SSOStub, SEOStub, BannerStub)
are generated by grpcio-tools from services/contracts/proto/par_pro.proto
when this package is first imported. The path is resolved against sys.path,
so the repository root must be on it (pytest `pythonpath`, uvicorn `--app-dir`).
"""

import grpc

PROTO_PATH = "services/contracts/proto/par_pro.proto"

par_pro_pb2, par_pro_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

__all__ = ["PROTO_PATH", "par_pro_pb2", "par_pro_pb2_grpc"]
