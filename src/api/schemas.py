"""Response envelope shared by every endpoint."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from model.metrics import ContainerMetrics


class ResponseData(BaseModel):
    model_config = ConfigDict(frozen=True)

    container_metrics: List[ContainerMetrics] = Field(default_factory=list)
    failed_containers: List[str] = Field(default_factory=list)


class APIResponse(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "status": "success",
                "message": "Container metrics retrieved successfully",
                "data": {
                    "container_metrics": [
                        {
                            "container_id": "f3f177b2b3b4",
                            "container_name": "my-container",
                            "timestamp": "2021-09-01T12:34:56Z",
                            "container_cpu_usage_percent": 0.07,
                            "container_memory_usage_bytes": 36175872,
                            "container_memory_limit_bytes": 2088427847,
                            "container_memory_usage_percent": 0.79,
                            "container_network_receive_bytes_total": 1258291,
                            "container_network_transmit_bytes_total": 3565158,
                            "container_block_read_bytes": 75468,
                            "container_block_write_bytes": 0,
                            "container_pids": 123,
                            "active": False,
                        }
                    ],
                    "failed_containers": [],
                },
            }
        },
    )

    status: Literal["success", "error"]
    message: str
    data: ResponseData = Field(default_factory=ResponseData)

    @classmethod
    def success(cls, message: str, metrics=(), failed=()) -> "APIResponse":
        return cls(
            status="success",
            message=message,
            data=ResponseData(container_metrics=list(metrics), failed_containers=list(failed)),
        )

    @classmethod
    def error(cls, message: str) -> "APIResponse":
        return cls(status="error", message=message)
