from flask import Blueprint, jsonify

from library_backend.services.member_service import MemberService
from library_backend.utils.validators import get_json_object

member_bp = Blueprint("members", __name__, url_prefix="/api")


@member_bp.get("/members")
def list_members():
    return jsonify([m.to_dict() for m in MemberService.list_members()])


@member_bp.get("/members/<int:member_id>")
def get_member(member_id: int):
    return jsonify(MemberService.get_member(member_id).to_dict())


@member_bp.get("/members/<int:member_id>/borrowed")
def member_loans(member_id: int):
    return jsonify([x.to_dict() for x in MemberService.member_loans(member_id)])


@member_bp.post("/members")
def create_member():
    data = get_json_object()
    member = MemberService.create_member(data.get("name"), data.get("email"))
    return jsonify(member.to_dict()), 201


@member_bp.put("/members/<int:member_id>")
def update_member(member_id: int):
    data = get_json_object()
    member = MemberService.update_member(member_id, data)
    return jsonify({"message": "Member updated successfully.", "member": member.to_dict()})


@member_bp.post("/members/<int:member_id>/pay-fines")
def pay_fines(member_id: int):
    MemberService.clear_fines(member_id)
    return jsonify({"message": "Fines have been cleared."})


@member_bp.delete("/members/<int:member_id>")
def delete_member(member_id: int):
    MemberService.delete_member(member_id)
    return "", 204
